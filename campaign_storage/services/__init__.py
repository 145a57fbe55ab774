"""Campaign storage services."""

from typing import Optional

from campaign_storage.core.config import Settings
from campaign_storage.storage import StorageClient, create_storage_client
from .messages import MessageStorageFacade
from .results import OperationResult, RemoteFailure, Success, ValidationFailed
from .storage_facade import StorageFacade


def build_storage_facade(settings: Settings, client: Optional[StorageClient] = None) -> StorageFacade:
    """Wire a StorageFacade from settings.

    Args:
        settings: Source of bucket, region and URL expiry
        client: Storage client to use; built from settings when omitted
    """
    return StorageFacade(
        client=client or create_storage_client(settings),
        bucket_name=settings.AWS_S3_BUCKET_NAME,
        region=settings.AWS_REGION,
        signed_url_expiry=settings.SIGNED_URL_EXPIRY_SECONDS,
    )


__all__ = [
    "build_storage_facade",
    "MessageStorageFacade",
    "OperationResult",
    "RemoteFailure",
    "StorageFacade",
    "Success",
    "ValidationFailed",
]
