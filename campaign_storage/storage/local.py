"""Local filesystem storage client."""

import aiofiles
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, List
from urllib.parse import quote

from campaign_storage.core.errors import invalid_key_error, not_found_error
from campaign_storage.core.logging_config import get_logger
from .protocol import StoredObject


logger = get_logger(__name__)


class LocalStorageClient:
    """Local filesystem implementation of the StorageClient protocol.

    Objects live at ``{base_path}/{bucket}/{key}``. Status codes mirror what
    S3 reports for the same calls. Suitable for development and tests.
    """

    def __init__(self, base_path: str):
        """Initialize local storage client.

        Args:
            base_path: Root directory for file storage
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def get_local_path(self, bucket: str, key: str) -> Path:
        """Get absolute filesystem path for an object.

        Raises:
            StorageOperationError: STORAGE_INVALID_KEY if bucket or key
                contain path traversal patterns
        """
        if '..' in bucket or '..' in key:
            raise invalid_key_error(
                "Path traversal patterns (..) are not allowed",
                details={"bucket": bucket, "key": key},
            )
        return self.base_path / bucket / key

    async def put_object(self, bucket: str, key: str, file: BinaryIO) -> int:
        """Write a stream to the local filesystem."""
        full_path = self.get_local_path(bucket, key)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        bytes_written = 0
        async with aiofiles.open(full_path, 'wb') as f:
            while chunk := file.read(8192):
                await f.write(chunk)
                bytes_written += len(chunk)

        logger.info(
            "local_storage_put_success",
            bucket=bucket,
            key=key,
            bytes_written=bytes_written,
        )
        return 200

    async def delete_object(self, bucket: str, key: str) -> int:
        """Delete one file; missing files are not an error."""
        full_path = self.get_local_path(bucket, key)

        if full_path.is_file():
            full_path.unlink()
            logger.info("local_storage_delete_success", bucket=bucket, key=key)
        else:
            logger.warning("local_storage_delete_not_found", bucket=bucket, key=key)

        return 204

    async def delete_objects(self, bucket: str, keys: List[str]) -> int:
        """Delete a batch of files."""
        for key in keys:
            await self.delete_object(bucket, key)
        return 200

    async def list_objects(self, bucket: str, prefix: str) -> List[StoredObject]:
        """List files whose relative key starts with prefix, sorted like S3."""
        root = self.get_local_path(bucket, "")
        if not root.is_dir():
            return []

        objects = []
        for path in root.rglob("*"):
            if not path.is_file():
                continue
            key = path.relative_to(root).as_posix()
            if key.startswith(prefix):
                modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
                objects.append(StoredObject(key=key, last_modified=modified))

        objects.sort(key=lambda obj: obj.key)
        return objects

    async def get_object(self, bucket: str, key: str) -> bytes:
        """Read a file's contents.

        Raises:
            StorageOperationError: STORAGE_NOT_FOUND if the file does not exist
        """
        full_path = self.get_local_path(bucket, key)

        try:
            async with aiofiles.open(full_path, 'rb') as f:
                data = await f.read()
        except FileNotFoundError:
            logger.error("local_storage_get_not_found", bucket=bucket, key=key)
            raise not_found_error(
                f"Object not found: {bucket}/{key}",
                details={"bucket": bucket, "key": key},
            )

        logger.info("local_storage_get_success", bucket=bucket, key=key, bytes_read=len(data))
        return data

    async def generate_presigned_url(self, bucket: str, key: str, expires_in: int = 3600) -> str:
        """Get URL for static file serving, stamped with its expiry time."""
        expires_at = int(time.time()) + expires_in
        return f"/storage/{quote(bucket)}/{quote(key)}?expires={expires_at}"
