"""
Pytest configuration and shared fixtures for campaign-storage tests.

This module provides:
- Storage client doubles (AsyncMock) and a tmp_path-backed local client
- Facade fixtures wired to those clients
- Test data fixtures
"""

from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path
from typing import List
from unittest.mock import AsyncMock

import pytest

from campaign_storage.services import MessageStorageFacade, StorageFacade
from campaign_storage.storage.local import LocalStorageClient
from campaign_storage.storage.protocol import StoredObject


BUCKET = "campaign-assets-test"
REGION = "us-east-1"
ACCOUNT = "acme"
CAMPAIGN = "spring-sale"
PREFIX = f"{ACCOUNT}/{CAMPAIGN}/"


def stored(*names: str, base: datetime = datetime(2024, 5, 1, tzinfo=timezone.utc)) -> List[StoredObject]:
    """Build a folder listing for the default campaign, one minute apart."""
    return [
        StoredObject(key=f"{PREFIX}{name}", last_modified=base.replace(minute=index))
        for index, name in enumerate(names)
    ]


# ============================================================================
# Storage fixtures
# ============================================================================

@pytest.fixture
def mock_client() -> AsyncMock:
    """Mock storage client reporting success for every call.

    Returns:
        AsyncMock: Mocked storage client
    """
    client = AsyncMock()
    client.put_object.return_value = 200
    client.delete_object.return_value = 204
    client.delete_objects.return_value = 200
    client.list_objects.return_value = []
    client.get_object.return_value = b'{"ok": true}'
    client.generate_presigned_url.side_effect = (
        lambda bucket, key, expires_in: f"https://{bucket}.s3.amazonaws.com/{key}?X-Amz-Expires={expires_in}"
    )
    return client


@pytest.fixture
def facade(mock_client: AsyncMock) -> StorageFacade:
    return StorageFacade(mock_client, bucket_name=BUCKET, region=REGION)


@pytest.fixture
def message_facade(facade: StorageFacade) -> MessageStorageFacade:
    return MessageStorageFacade(facade, support_email="support@deebly.co")


@pytest.fixture
def local_client(tmp_path: Path) -> LocalStorageClient:
    """Create a local storage client rooted in a temporary directory."""
    return LocalStorageClient(base_path=str(tmp_path / "storage"))


@pytest.fixture
def local_facade(local_client: LocalStorageClient) -> StorageFacade:
    return StorageFacade(local_client, bucket_name=BUCKET, region=REGION)


# ============================================================================
# Test data fixtures
# ============================================================================

@pytest.fixture
def sample_image_bytes() -> bytes:
    """Minimal valid GIF image data (1x1 pixel)."""
    return bytes.fromhex(
        '47494638396101000100800000000000ffffff21f90401000000002c00000000'
        '010001000002024401003b'
    )


@pytest.fixture
def image_stream(sample_image_bytes: bytes) -> BytesIO:
    return BytesIO(sample_image_bytes)


@pytest.fixture
def named_stream(tmp_path: Path):
    """Open file on disk, as produced by the ad builder request generator."""
    path = tmp_path / "generated" / f"ad_builder_request_{CAMPAIGN}.json"
    path.parent.mkdir(parents=True)
    path.write_text('{"adset": "spring"}', encoding="utf-8")
    with path.open("rb") as f:
        yield f
