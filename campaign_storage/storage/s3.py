"""AWS S3 storage client."""

import aioboto3
from typing import Any, BinaryIO, Dict, List, Optional
from botocore.exceptions import ClientError, BotoCoreError

from campaign_storage.core.errors import (
    ErrorCode,
    StorageOperationError,
    access_denied_error,
    not_found_error,
)
from campaign_storage.core.logging_config import get_logger
from .protocol import StoredObject


logger = get_logger(__name__)


def _status_of(response: Dict[str, Any]) -> int:
    return response.get('ResponseMetadata', {}).get('HTTPStatusCode', 0)


class S3StorageClient:
    """AWS S3 implementation of the StorageClient protocol.

    Every call opens its own client context on a shared aioboto3 session, so
    concurrent coroutines never share a connection object.

    Supports both AWS S3 and S3-compatible services (e.g., MinIO) via endpoint_url.
    """

    def __init__(self, region: str, endpoint_url: Optional[str] = None):
        """Initialize S3 storage client.

        Args:
            region: AWS region name (e.g., "us-east-1")
            endpoint_url: Optional S3-compatible endpoint (e.g., "http://minio:9000")
        """
        self.session = aioboto3.Session()
        self.region = region
        self.endpoint_url = endpoint_url

        logger.info(
            "s3_storage_client_initialized",
            region=self.region,
            endpoint_url=self.endpoint_url,
            s3_compatible=bool(endpoint_url),
        )

    def _get_s3_client(self):
        """Create S3 client with optional custom endpoint.

        Returns:
            aioboto3 S3 client context manager
        """
        return self.session.client(
            's3',
            region_name=self.region,
            endpoint_url=self.endpoint_url
        )

    def _handle_s3_error(
        self,
        exc: Exception,
        operation: str,
        code: ErrorCode,
        bucket: str,
        key: str
    ) -> StorageOperationError:
        """Convert a botocore failure into a StorageOperationError.

        Args:
            exc: Original exception
            operation: Operation being performed (e.g., 'upload', 'list')
            code: Error code used when nothing more specific applies
            bucket: Bucket name
            key: Object key or prefix

        Returns:
            StorageOperationError: Error carrying code, status and context
        """
        error_context: Dict[str, Any] = {
            "operation": operation,
            "bucket": bucket,
            "key": key,
        }
        status_code = None

        if isinstance(exc, ClientError):
            error_code = exc.response.get('Error', {}).get('Code', 'Unknown')
            error_message = exc.response.get('Error', {}).get('Message', str(exc))
            status_code = exc.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
            error_context.update({
                "error_code": error_code,
                "error_message": error_message,
                "http_status": status_code,
            })

            if error_code in ('NoSuchKey', 'NoSuchBucket', '404'):
                return not_found_error(
                    f"Object not found in S3: {bucket}/{key}", details=error_context
                )
            if error_code in ('AccessDenied', '403'):
                return access_denied_error(
                    f"Access denied to S3 bucket '{bucket}'. "
                    "Check AWS credentials and IAM permissions.",
                    details=error_context,
                )

        elif isinstance(exc, BotoCoreError):
            error_context["botocore_error"] = type(exc).__name__

        return StorageOperationError(
            code,
            f"{operation.capitalize()} failed: {exc}",
            status_code=status_code,
            details=error_context,
        )

    async def put_object(self, bucket: str, key: str, file: BinaryIO) -> int:
        """Upload a stream to S3.

        Raises:
            StorageOperationError: If the request could not be completed
        """
        logger.debug("s3_put_object_started", bucket=bucket, key=key, region=self.region)

        try:
            async with self._get_s3_client() as s3:
                response = await s3.put_object(Bucket=bucket, Key=key, Body=file)
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "s3_put_object_failed",
                bucket=bucket,
                key=key,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise self._handle_s3_error(exc, "upload", ErrorCode.STORAGE_WRITE_FAILED, bucket, key)

        status = _status_of(response)
        logger.info("s3_put_object_completed", bucket=bucket, key=key, status=status)
        return status

    async def delete_object(self, bucket: str, key: str) -> int:
        """Delete one object from S3.

        Note:
            S3 delete operations are idempotent - deleting a non-existent
            object still reports 204.
        """
        logger.debug("s3_delete_object_started", bucket=bucket, key=key)

        try:
            async with self._get_s3_client() as s3:
                response = await s3.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "s3_delete_object_failed",
                bucket=bucket,
                key=key,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise self._handle_s3_error(exc, "delete", ErrorCode.STORAGE_DELETE_FAILED, bucket, key)

        status = _status_of(response)
        logger.info("s3_delete_object_completed", bucket=bucket, key=key, status=status)
        return status

    async def delete_objects(self, bucket: str, keys: List[str]) -> int:
        """Delete a batch of keys with a single DeleteObjects request.

        S3 rejects a DeleteObjects request without keys, so an empty batch is
        answered locally with 200 and no request is sent.
        """
        if not keys:
            logger.debug("s3_delete_objects_empty_batch", bucket=bucket)
            return 200

        logger.debug("s3_delete_objects_started", bucket=bucket, key_count=len(keys))

        try:
            async with self._get_s3_client() as s3:
                response = await s3.delete_objects(
                    Bucket=bucket,
                    Delete={'Objects': [{'Key': key} for key in keys], 'Quiet': True},
                )
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "s3_delete_objects_failed",
                bucket=bucket,
                key_count=len(keys),
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise self._handle_s3_error(
                exc, "batch delete", ErrorCode.STORAGE_DELETE_FAILED, bucket, keys[0]
            )

        for error in response.get('Errors', []):
            logger.warning(
                "s3_delete_objects_key_failed",
                bucket=bucket,
                key=error.get('Key'),
                error_code=error.get('Code'),
                error=error.get('Message'),
            )

        status = _status_of(response)
        logger.info(
            "s3_delete_objects_completed",
            bucket=bucket,
            key_count=len(keys),
            status=status,
        )
        return status

    async def list_objects(self, bucket: str, prefix: str) -> List[StoredObject]:
        """List objects under a prefix with one ListObjectsV2 call."""
        try:
            async with self._get_s3_client() as s3:
                response = await s3.list_objects_v2(Bucket=bucket, Prefix=prefix)
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "s3_list_objects_failed",
                bucket=bucket,
                prefix=prefix,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise self._handle_s3_error(exc, "list", ErrorCode.STORAGE_LIST_FAILED, bucket, prefix)

        objects = [
            StoredObject(key=item['Key'], last_modified=item['LastModified'])
            for item in response.get('Contents', [])
        ]

        logger.debug(
            "s3_list_objects_completed",
            bucket=bucket,
            prefix=prefix,
            object_count=len(objects),
            truncated=response.get('IsTruncated', False),
        )
        return objects

    async def get_object(self, bucket: str, key: str) -> bytes:
        """Download an object's contents.

        Raises:
            StorageOperationError: STORAGE_NOT_FOUND if the key does not exist
        """
        try:
            async with self._get_s3_client() as s3:
                response = await s3.get_object(Bucket=bucket, Key=key)
                data = await response['Body'].read()
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "s3_get_object_failed",
                bucket=bucket,
                key=key,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise self._handle_s3_error(exc, "download", ErrorCode.STORAGE_READ_FAILED, bucket, key)

        logger.info("s3_get_object_completed", bucket=bucket, key=key, bytes_read=len(data))
        return data

    async def generate_presigned_url(self, bucket: str, key: str, expires_in: int = 3600) -> str:
        """Generate presigned GET URL for an S3 object.

        Args:
            bucket: Bucket name
            key: Object key
            expires_in: URL expiration time in seconds (default: 1 hour, max: 7 days)

        Raises:
            ValueError: If expires_in is out of range
        """
        if expires_in < 1:
            raise ValueError("expires_in must be at least 1 second")
        if expires_in > 604800:  # 7 days in seconds
            raise ValueError("expires_in cannot exceed 604800 seconds (7 days)")

        try:
            async with self._get_s3_client() as s3:
                url = await s3.generate_presigned_url(
                    'get_object',
                    Params={'Bucket': bucket, 'Key': key},
                    ExpiresIn=expires_in
                )
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "s3_presigned_url_generation_failed",
                bucket=bucket,
                key=key,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise self._handle_s3_error(
                exc, "presigned_url_generation", ErrorCode.STORAGE_PRESIGN_FAILED, bucket, key
            )

        logger.debug("s3_presigned_url_generated", bucket=bucket, key=key, expires_in=expires_in)
        return url
