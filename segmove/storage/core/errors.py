"""
Unified error hierarchy for object store operations.

All object store backends raise subclasses of StorageError, so the mover
can tell a missing object apart from a transient backend failure without
knowing which backend it talks to.
"""

import re
from typing import Any


class StorageError(Exception):
    """
    Base exception for all object store operations.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConnectionError(StorageError):
    """
    Failed to connect to the object store.

    Raised when:
    - The client cannot be created
    - Authentication fails
    - The endpoint is unreachable
    """

    def __init__(
        self,
        message: str = "Failed to connect to object store",
        backend: str | None = None,
        url: str | None = None,
        **details,
    ):
        super().__init__(
            message,
            details={"backend": backend, "url": self._mask_url(url), **details},
        )
        self.backend = backend
        self.url = url

    @staticmethod
    def _mask_url(url: str | None) -> str | None:
        """Mask credentials in URLs like s3://key:secret@host/"""
        if not url:
            return None
        return re.sub(r"://([^:/]+):([^@]+)@", r"://\1:***@", url)


class NotFoundError(StorageError):
    """
    Requested item not found in storage.
    """

    def __init__(
        self,
        message: str = "Item not found",
        item_type: str | None = None,
        item_id: str | None = None,
        **details,
    ):
        super().__init__(
            message,
            details={"item_type": item_type, "item_id": item_id, **details},
        )
        self.item_type = item_type
        self.item_id = item_id


class ObjectNotFoundError(NotFoundError):
    """
    Object (or its bucket) does not exist.

    Raised by copy when the source object is gone.
    """

    def __init__(self, bucket: str, key: str, message: str | None = None):
        super().__init__(
            message or f"Object not found: {bucket}/{key}",
            item_type="object",
            item_id=f"{bucket}/{key}",
        )
        self.bucket = bucket
        self.key = key


class StorageTransientError(StorageError):
    """
    Temporary object store failure (throttling, timeouts, 5xx).

    Propagated unchanged to the caller, who owns the retry policy.
    """

    def __init__(
        self,
        message: str = "Transient object store failure",
        operation: str | None = None,
        code: str | None = None,
        **details,
    ):
        super().__init__(
            message,
            details={"operation": operation, "code": code, **details},
        )
        self.operation = operation
        self.code = code
