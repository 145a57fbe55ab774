"""
Configuration tests for campaign-storage.

Tests the type-safe Pydantic configuration system and the factories that
read it.
"""

import pytest
from pydantic import ValidationError

from campaign_storage.core.config import Settings
from campaign_storage.services import StorageFacade, build_storage_facade
from campaign_storage.storage import create_storage_client
from campaign_storage.storage.local import LocalStorageClient
from campaign_storage.storage.s3 import S3StorageClient


# ============================================================================
# Settings tests
# ============================================================================

@pytest.mark.unit
def test_settings_defaults():
    settings = Settings()

    assert settings.SUPPORT_EMAIL == "support@deebly.co"
    assert settings.SIGNED_URL_EXPIRY_SECONDS == 3600
    assert settings.STORAGE_BACKEND in ("local", "s3")


@pytest.mark.unit
@pytest.mark.parametrize("bucket", ["ab", "Campaign-Assets", "-assets", "assets..prod", "192.168.0.1"])
def test_bucket_name_validation(bucket):
    with pytest.raises(ValidationError):
        Settings(AWS_S3_BUCKET_NAME=bucket)


@pytest.mark.unit
def test_bucket_name_required_for_s3():
    with pytest.raises(ValidationError) as exc_info:
        Settings(STORAGE_BACKEND="s3", AWS_S3_BUCKET_NAME="")

    assert "AWS_S3_BUCKET_NAME must be set" in str(exc_info.value)


@pytest.mark.unit
def test_region_required_for_s3():
    with pytest.raises(ValidationError):
        Settings(STORAGE_BACKEND="s3", AWS_REGION="")


@pytest.mark.unit
def test_unknown_backend_rejected():
    with pytest.raises(ValidationError):
        Settings(STORAGE_BACKEND="gcs")


@pytest.mark.unit
def test_backend_is_normalized():
    assert Settings(STORAGE_BACKEND=" LOCAL ").STORAGE_BACKEND == "local"


@pytest.mark.unit
def test_endpoint_url_validation():
    assert Settings(AWS_ENDPOINT_URL="").AWS_ENDPOINT_URL is None
    assert Settings(AWS_ENDPOINT_URL="http://minio:9000").AWS_ENDPOINT_URL == "http://minio:9000"

    with pytest.raises(ValidationError):
        Settings(AWS_ENDPOINT_URL="minio:9000")


@pytest.mark.unit
@pytest.mark.parametrize("expiry", [0, 604801])
def test_signed_url_expiry_bounds(expiry):
    with pytest.raises(ValidationError):
        Settings(SIGNED_URL_EXPIRY_SECONDS=expiry)


@pytest.mark.unit
def test_support_email_validation():
    with pytest.raises(ValidationError):
        Settings(SUPPORT_EMAIL="not-an-address")


@pytest.mark.unit
def test_json_logs_forced_in_production():
    settings = Settings(ENVIRONMENT="production", DEBUG=True, LOG_JSON=False)

    assert settings.is_debug_mode
    assert settings.use_json_logs


@pytest.mark.unit
def test_console_logs_in_debug_development():
    settings = Settings(ENVIRONMENT="development", DEBUG=True, LOG_JSON=False)

    assert not settings.use_json_logs


# ============================================================================
# Factory tests
# ============================================================================

@pytest.mark.unit
def test_local_backend_factory(tmp_path):
    settings = Settings(STORAGE_BACKEND="local", STORAGE_PATH=str(tmp_path / "files"))

    client = create_storage_client(settings)

    assert isinstance(client, LocalStorageClient)
    assert (tmp_path / "files").is_dir()


@pytest.mark.unit
def test_s3_backend_factory():
    settings = Settings(
        STORAGE_BACKEND="s3",
        AWS_REGION="eu-west-1",
        AWS_ENDPOINT_URL="http://minio:9000",
    )

    client = create_storage_client(settings)

    assert isinstance(client, S3StorageClient)
    assert client.region == "eu-west-1"
    assert client.endpoint_url == "http://minio:9000"


@pytest.mark.unit
def test_factory_builds_a_new_client_each_call(tmp_path):
    settings = Settings(STORAGE_BACKEND="local", STORAGE_PATH=str(tmp_path))

    assert create_storage_client(settings) is not create_storage_client(settings)


@pytest.mark.unit
def test_build_storage_facade(tmp_path):
    settings = Settings(
        STORAGE_BACKEND="local",
        STORAGE_PATH=str(tmp_path),
        AWS_S3_BUCKET_NAME="campaign-assets-prod",
        AWS_REGION="us-west-2",
        SIGNED_URL_EXPIRY_SECONDS=900,
    )

    facade = build_storage_facade(settings)

    assert isinstance(facade, StorageFacade)
    assert isinstance(facade.client, LocalStorageClient)
    assert facade.bucket_name == "campaign-assets-prod"
    assert facade.region == "us-west-2"
    assert facade.signed_url_expiry == 900


@pytest.mark.unit
def test_build_storage_facade_with_injected_client(mock_client):
    facade = build_storage_facade(Settings(), client=mock_client)

    assert facade.client is mock_client
