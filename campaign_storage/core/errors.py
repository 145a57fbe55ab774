"""
Error codes and exceptions for storage operations.

Storage clients raise StorageOperationError with a standardized code so the
facade (and anything else calling a client directly) can tell a missing
object from a permission problem without parsing botocore responses.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # Storage errors (STORAGE_xxx)
    STORAGE_WRITE_FAILED = "STORAGE_001"
    STORAGE_READ_FAILED = "STORAGE_002"
    STORAGE_DELETE_FAILED = "STORAGE_003"
    STORAGE_LIST_FAILED = "STORAGE_004"
    STORAGE_PRESIGN_FAILED = "STORAGE_005"
    STORAGE_NOT_FOUND = "STORAGE_006"
    STORAGE_ACCESS_DENIED = "STORAGE_007"
    STORAGE_INVALID_KEY = "STORAGE_008"


class StorageOperationError(Exception):
    """
    A remote storage call failed.

    Attributes:
        code: Standardized error code
        message: Human-readable description
        status_code: HTTP status reported by the store, if any
        details: Debugging context (bucket, key, operation, ...)
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


def not_found_error(message: str, details: Optional[Dict[str, Any]] = None) -> StorageOperationError:
    """Create a not-found storage error (404)."""
    return StorageOperationError(ErrorCode.STORAGE_NOT_FOUND, message, 404, details)


def access_denied_error(message: str, details: Optional[Dict[str, Any]] = None) -> StorageOperationError:
    """Create an access-denied storage error (403)."""
    return StorageOperationError(ErrorCode.STORAGE_ACCESS_DENIED, message, 403, details)


def invalid_key_error(message: str, details: Optional[Dict[str, Any]] = None) -> StorageOperationError:
    """Create an invalid-key storage error (400)."""
    return StorageOperationError(ErrorCode.STORAGE_INVALID_KEY, message, 400, details)
