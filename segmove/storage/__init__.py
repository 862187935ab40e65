"""
segmove object storage layer.

Usage:
    >>> from segmove.storage import create_object_store, ObjectStore
    >>> store = create_object_store("memory")
"""

from segmove.storage.backends.memory import InMemoryObjectStore
from segmove.storage.core import (
    ConnectionError,
    NotFoundError,
    ObjectNotFoundError,
    StorageError,
    StorageTransientError,
)
from segmove.storage.factory import create_object_store, create_object_store_from_url
from segmove.storage.interfaces import ObjectStore, ObjectSummary

__all__ = [
    "ConnectionError",
    "InMemoryObjectStore",
    "NotFoundError",
    "ObjectNotFoundError",
    "ObjectStore",
    "ObjectSummary",
    "StorageError",
    "StorageTransientError",
    "create_object_store",
    "create_object_store_from_url",
]
