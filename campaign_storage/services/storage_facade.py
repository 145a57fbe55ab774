"""
Campaign Storage Facade

Translates campaign asset operations (creatives, audience definitions,
generated ad builder requests) into storage client calls. Every object lives
under ``{account}/{campaign}/``.

The facade holds no mutable state: the bucket, region and URL expiry are fixed
at construction and each call is one independent round trip (or a list
followed by one more call). Nothing is retried or cached.
"""
import os
from datetime import datetime
from typing import BinaryIO, List, Optional

from campaign_storage.core.errors import StorageOperationError
from campaign_storage.core.logging_config import get_logger
from campaign_storage.storage.protocol import StorageClient
from .keys import folder_prefix, object_key, strip_prefix
from .results import OperationResult, RemoteFailure, Success, ValidationFailed
from .validation import VALID, validate_image

logger = get_logger(__name__)

AUDIENCE_FILE_NAME = "audience.json"
SIGNED_URL_SUFFIXES = (".jpg", ".png", ".gif")

STATUS_OK = 200
STATUS_NO_CONTENT = 204


def ad_builder_file_name(campaign_name: str) -> str:
    return f"ad_builder_request_{campaign_name}.json"


class StorageFacade:
    """
    Campaign-scoped operations over a StorageClient.

    Mutating operations return an OperationResult; remote failures of any
    kind collapse into RemoteFailure. Read operations return data and let
    StorageOperationError propagate.
    """

    def __init__(
        self,
        client: StorageClient,
        bucket_name: str,
        region: str,
        signed_url_expiry: int = 3600,
    ):
        self.client = client
        self.bucket_name = bucket_name
        self.region = region
        self.signed_url_expiry = signed_url_expiry

    async def _put(self, key: str, file: BinaryIO, operation: str) -> OperationResult:
        try:
            status = await self.client.put_object(self.bucket_name, key, file)
        except StorageOperationError as exc:
            return RemoteFailure(operation, exc.status_code)

        if status != STATUS_OK:
            return RemoteFailure(operation, status)
        return Success(key)

    async def upload_image(
        self,
        account_name: str,
        campaign_name: str,
        file: BinaryIO,
        file_name: str,
        content_length: int,
        max_length: int = 0,
    ) -> OperationResult:
        """Validate and upload a creative image.

        The stream is closed once the upload has been attempted, whatever the
        outcome. Streams rejected by validation are left to the caller.

        Args:
            file: Readable binary stream with the image contents
            file_name: Name used for both validation and the object key
            content_length: Upload size in bytes
            max_length: Byte ceiling, 0 disables the size check

        Returns:
            Success(key), ValidationFailed(message) or RemoteFailure
        """
        validation = validate_image(file_name, content_length, max_length)
        if validation != VALID:
            logger.info(
                "campaign_image_rejected",
                account=account_name,
                campaign=campaign_name,
                file_name=file_name,
                content_length=content_length,
                max_length=max_length,
            )
            return ValidationFailed(validation)

        key = object_key(account_name, campaign_name, file_name)
        try:
            result = await self._put(key, file, "upload_image")
        finally:
            file.close()

        logger.info(
            "campaign_image_uploaded" if isinstance(result, Success) else "campaign_image_upload_failed",
            account=account_name,
            campaign=campaign_name,
            key=key,
        )
        return result

    async def upload_named_file(
        self, account_name: str, campaign_name: str, file: BinaryIO
    ) -> OperationResult:
        """Upload a generated document under the basename of ``file.name``."""
        key = object_key(account_name, campaign_name, os.path.basename(file.name))
        return await self._put(key, file, "upload_named_file")

    async def upload_audience(
        self, account_name: str, campaign_name: str, file: BinaryIO
    ) -> OperationResult:
        """Upload an audience definition under the basename of ``file.name``."""
        key = object_key(account_name, campaign_name, os.path.basename(file.name))
        return await self._put(key, file, "upload_audience")

    async def delete_object(
        self, account_name: str, campaign_name: str, file_name: str
    ) -> OperationResult:
        key = object_key(account_name, campaign_name, file_name)
        try:
            status = await self.client.delete_object(self.bucket_name, key)
        except StorageOperationError as exc:
            return RemoteFailure("delete_object", exc.status_code)

        if status != STATUS_NO_CONTENT:
            return RemoteFailure("delete_object", status)

        logger.info("campaign_object_deleted", account=account_name, campaign=campaign_name, key=key)
        return Success(key)

    async def clear_folder(self, account_name: str, campaign_name: str) -> OperationResult:
        """Delete everything in the campaign folder except the audience file.

        This is a listing followed by one batch delete; objects written in
        between survive.

        Returns:
            Success(list of deleted keys) or RemoteFailure
        """
        prefix = folder_prefix(account_name, campaign_name)
        try:
            objects = await self.client.list_objects(self.bucket_name, prefix)
            keys = [obj.key for obj in objects if not obj.key.endswith(AUDIENCE_FILE_NAME)]
            status = await self.client.delete_objects(self.bucket_name, keys)
        except StorageOperationError as exc:
            return RemoteFailure("clear_folder", exc.status_code)

        if status != STATUS_OK:
            return RemoteFailure("clear_folder", status)

        logger.info(
            "campaign_folder_cleared",
            account=account_name,
            campaign=campaign_name,
            deleted_count=len(keys),
        )
        return Success(keys)

    async def list_folder_contents(self, account_name: str, campaign_name: str) -> List[str]:
        prefix = folder_prefix(account_name, campaign_name)
        objects = await self.client.list_objects(self.bucket_name, prefix)
        return [strip_prefix(obj.key, prefix) for obj in objects]

    async def get_last_modified(self, account_name: str, campaign_name: str) -> Optional[datetime]:
        """Most recent modification time in the folder, None when it is empty."""
        prefix = folder_prefix(account_name, campaign_name)
        objects = await self.client.list_objects(self.bucket_name, prefix)
        if not objects:
            return None
        return max(obj.last_modified for obj in objects)

    async def get_signed_url(self, account_name: str, campaign_name: str, object_name: str) -> str:
        """Presign one object. The object is not checked for existence."""
        key = object_key(account_name, campaign_name, object_name)
        return await self.client.generate_presigned_url(self.bucket_name, key, self.signed_url_expiry)

    async def get_signed_urls(self, account_name: str, campaign_name: str) -> List[str]:
        """Presign every .jpg, .png and .gif object in the folder.

        Matching is case-sensitive and ``.jpeg`` objects are not included.
        """
        urls = []
        for name in await self.list_folder_contents(account_name, campaign_name):
            if name.endswith(SIGNED_URL_SUFFIXES):
                urls.append(await self.get_signed_url(account_name, campaign_name, name))
        return urls

    async def object_exists(self, account_name: str, campaign_name: str, file_name: str) -> bool:
        """True when any key in the folder contains file_name as a substring."""
        prefix = folder_prefix(account_name, campaign_name)
        objects = await self.client.list_objects(self.bucket_name, prefix)
        return any(file_name in obj.key for obj in objects)

    async def _read_text(self, key: str) -> str:
        data = await self.client.get_object(self.bucket_name, key)
        return data.decode("utf-8")

    async def get_ad_builder_json(self, account_name: str, campaign_name: str) -> str:
        """Fetch the campaign's ad builder request document.

        Raises:
            StorageOperationError: If the document is missing or unreadable
        """
        key = object_key(account_name, campaign_name, ad_builder_file_name(campaign_name))
        return await self._read_text(key)

    async def get_audience_json(self, account_name: str, campaign_name: str) -> str:
        """Fetch the audience definition, or "" when the folder has none."""
        if not await self.object_exists(account_name, campaign_name, AUDIENCE_FILE_NAME):
            return ""
        return await self._read_text(object_key(account_name, campaign_name, AUDIENCE_FILE_NAME))

    async def get_json_document(self, account_name: str, campaign_name: str, logical_name: str) -> str:
        """Fetch a campaign JSON document by logical name.

        Args:
            logical_name: "ad_builder_request" or "audience"

        Raises:
            ValueError: For any other logical name
        """
        if logical_name == "ad_builder_request":
            return await self.get_ad_builder_json(account_name, campaign_name)
        if logical_name == "audience":
            return await self.get_audience_json(account_name, campaign_name)
        raise ValueError(f"Unknown campaign document: {logical_name}")

    def get_folder_console_url(self, account_name: str, campaign_name: str) -> str:
        """AWS console link for the campaign folder."""
        return (
            f"https://s3.console.aws.amazon.com/s3/buckets/{self.bucket_name}"
            f"?region={self.region}&prefix={folder_prefix(account_name, campaign_name)}"
        )
