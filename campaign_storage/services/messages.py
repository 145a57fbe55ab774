"""
String-returning view of the storage facade.

Existing callers compare return values against literal strings ("deleted",
"clear", "Image uploaded successfully.") or a boolean for audience uploads.
MessageStorageFacade renders OperationResult values into exactly those
strings; read operations pass straight through.
"""
from datetime import datetime
from typing import BinaryIO, List, Optional

from .results import OperationResult, Success, ValidationFailed
from .storage_facade import StorageFacade

IMAGE_UPLOADED = "Image uploaded successfully."
ADSET_REQUEST_UPLOADED = "Adset request successful."
DELETED = "deleted"
CLEARED = "clear"
ERROR_PREFIX = "Error: "


def generic_error_message(support_email: str) -> str:
    return f"An unknown error occured with the filesystem. Please email {support_email}."


class MessageStorageFacade:
    """Adapter exposing the facade through status strings and booleans."""

    def __init__(self, facade: StorageFacade, support_email: str = "support@deebly.co"):
        self.facade = facade
        self.error_message = generic_error_message(support_email)

    def _render(self, result: OperationResult, success_message: str) -> str:
        if isinstance(result, Success):
            return success_message
        if isinstance(result, ValidationFailed):
            return result.message
        return self.error_message

    async def upload_image(
        self,
        account_name: str,
        campaign_name: str,
        file: BinaryIO,
        file_name: str,
        content_length: int,
        max_length: int = 0,
    ) -> str:
        result = await self.facade.upload_image(
            account_name, campaign_name, file, file_name, content_length, max_length
        )
        return self._render(result, IMAGE_UPLOADED)

    async def upload_named_file(self, account_name: str, campaign_name: str, file: BinaryIO) -> str:
        result = await self.facade.upload_named_file(account_name, campaign_name, file)
        return self._render(result, ADSET_REQUEST_UPLOADED)

    async def upload_audience(self, account_name: str, campaign_name: str, file: BinaryIO) -> bool:
        result = await self.facade.upload_audience(account_name, campaign_name, file)
        return isinstance(result, Success)

    async def delete_object(self, account_name: str, campaign_name: str, file_name: str) -> str:
        result = await self.facade.delete_object(account_name, campaign_name, file_name)
        if isinstance(result, Success):
            return DELETED
        return ERROR_PREFIX + self.error_message

    async def clear_folder(self, account_name: str, campaign_name: str) -> str:
        result = await self.facade.clear_folder(account_name, campaign_name)
        return self._render(result, CLEARED)

    async def list_folder_contents(self, account_name: str, campaign_name: str) -> List[str]:
        return await self.facade.list_folder_contents(account_name, campaign_name)

    async def get_last_modified(self, account_name: str, campaign_name: str) -> Optional[datetime]:
        return await self.facade.get_last_modified(account_name, campaign_name)

    async def get_signed_urls(self, account_name: str, campaign_name: str) -> List[str]:
        return await self.facade.get_signed_urls(account_name, campaign_name)

    async def get_signed_url(self, account_name: str, campaign_name: str, object_name: str) -> str:
        return await self.facade.get_signed_url(account_name, campaign_name, object_name)

    async def get_ad_builder_json(self, account_name: str, campaign_name: str) -> str:
        return await self.facade.get_ad_builder_json(account_name, campaign_name)

    async def get_audience_json(self, account_name: str, campaign_name: str) -> str:
        return await self.facade.get_audience_json(account_name, campaign_name)

    def get_folder_console_url(self, account_name: str, campaign_name: str) -> str:
        return self.facade.get_folder_console_url(account_name, campaign_name)
