"""Storage client abstraction for S3 and local filesystem storage."""

from campaign_storage.core.config import Settings
from .protocol import StorageClient, StoredObject
from .local import LocalStorageClient
# S3 client imported lazily when needed


def create_storage_client(settings: Settings) -> StorageClient:
    """Factory function for storage clients.

    A new client is built on every call; callers hold on to the instance
    they were given.

    Returns:
        StorageClient: Client for the configured STORAGE_BACKEND

    Raises:
        ValueError: If unknown storage backend is configured
    """
    if settings.STORAGE_BACKEND == "local":
        return LocalStorageClient(settings.STORAGE_PATH)
    elif settings.STORAGE_BACKEND == "s3":
        # Lazy import to avoid requiring aioboto3 when using local storage
        from .s3 import S3StorageClient
        return S3StorageClient(
            region=settings.AWS_REGION,
            endpoint_url=settings.AWS_ENDPOINT_URL
        )
    else:
        raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")


__all__ = ["create_storage_client", "StorageClient", "StoredObject", "LocalStorageClient"]
