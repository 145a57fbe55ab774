"""Storage client protocol definition."""

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, List, Protocol


@dataclass(frozen=True)
class StoredObject:
    """One entry of a prefix listing."""

    key: str
    last_modified: datetime


class StorageClient(Protocol):
    """Protocol defining the operations the campaign facade needs from a store.

    Mutating calls return the HTTP-style status reported by the store so the
    caller decides what counts as success. Failures that never produce a
    status (network, permissions, missing objects) raise StorageOperationError.
    """

    async def put_object(self, bucket: str, key: str, file: BinaryIO) -> int:
        """Write a stream to an object key.

        Args:
            bucket: Storage bucket name
            key: Full object key

        Returns:
            int: Status code (200 on success)
        """
        ...

    async def delete_object(self, bucket: str, key: str) -> int:
        """Delete a single object.

        Returns:
            int: Status code (204 on success)
        """
        ...

    async def delete_objects(self, bucket: str, keys: List[str]) -> int:
        """Delete a batch of objects in one request.

        Returns:
            int: Status code (200 on success)
        """
        ...

    async def list_objects(self, bucket: str, prefix: str) -> List[StoredObject]:
        """List objects whose key starts with prefix, in store order."""
        ...

    async def get_object(self, bucket: str, key: str) -> bytes:
        """Read an object's full contents."""
        ...

    async def generate_presigned_url(self, bucket: str, key: str, expires_in: int) -> str:
        """Create a time-limited GET URL for one object.

        Args:
            expires_in: Validity window in seconds
        """
        ...
