"""
Shared object store infrastructure: the storage error hierarchy.

Usage:
    from segmove.storage.core import (
        StorageError,
        ConnectionError,
        NotFoundError,
        ObjectNotFoundError,
        StorageTransientError,
    )
"""

from .errors import (
    ConnectionError,
    NotFoundError,
    ObjectNotFoundError,
    StorageError,
    StorageTransientError,
)

__all__ = [
    "ConnectionError",
    "NotFoundError",
    "ObjectNotFoundError",
    "StorageError",
    "StorageTransientError",
]
