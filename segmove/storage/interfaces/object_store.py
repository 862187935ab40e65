"""
Object Store Interface

Defines the coarse primitives segment relocation relies on: existence
check, server-side copy, delete and prefix listing. There are no
multi-object transactions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ObjectSummary:
    """Listing entry for one stored object"""

    bucket: str
    key: str
    size: int = 0
    last_modified: datetime | None = None
    storage_class: str | None = None
    etag: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "bucket": self.bucket,
            "key": self.key,
            "size": self.size,
            "last_modified": self.last_modified.isoformat() if self.last_modified else None,
            "storage_class": self.storage_class,
            "etag": self.etag,
        }


class ObjectStore(ABC):
    """Abstract interface for object stores"""

    @abstractmethod
    async def exists(self, bucket: str, key: str) -> bool:
        """
        Check whether an object exists.

        A missing bucket reports False rather than raising.

        Raises:
            StorageTransientError: On throttling/timeouts
            StorageError: On any other backend failure
        """

    @abstractmethod
    async def copy(self, src_bucket: str, src_key: str, dst_bucket: str, dst_key: str) -> None:
        """
        Copy an object, overwriting the destination if present.

        Raises:
            ObjectNotFoundError: If the source object does not exist
            StorageTransientError: On throttling/timeouts
            StorageError: On any other backend failure
        """

    @abstractmethod
    async def delete(self, bucket: str, key: str) -> None:
        """
        Delete an object. Deleting an absent object is not an error.

        Raises:
            StorageError: If the backend refuses the delete
        """

    @abstractmethod
    async def list(self, bucket: str, prefix: str, limit: int | None = None) -> list[ObjectSummary]:
        """
        List objects whose key starts with prefix, ordered by key.

        Args:
            bucket: Bucket to list
            prefix: Key prefix
            limit: Maximum number of summaries to return

        Returns:
            Matching summaries (empty if the bucket does not exist)
        """

    async def close(self) -> None:
        """Release client resources"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
