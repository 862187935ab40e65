"""
In-Memory Object Store

Simple in-memory implementation for testing and dry runs.
Not suitable for production use.
"""

from collections import Counter
from datetime import UTC, datetime

from segmove.storage.core import ObjectNotFoundError
from segmove.storage.interfaces import ObjectStore, ObjectSummary


class InMemoryObjectStore(ObjectStore):
    """
    In-memory implementation of the object store.

    Objects are kept as bytes per bucket. Every call is counted in
    ``calls`` so tests can assert how much I/O a move performed.

    Example:
        >>> store = InMemoryObjectStore()
        >>> store.put("main", "base/ds/index.zip", b"...")
        >>> await store.exists("main", "base/ds/index.zip")
        True
    """

    def __init__(self):
        self._buckets: dict[str, dict[str, tuple[bytes, datetime]]] = {}
        self.calls: Counter[str] = Counter()

    def put(self, bucket: str, key: str, data: bytes = b"") -> None:
        """Store an object (test setup helper, not counted)"""
        self._buckets.setdefault(bucket, {})[key] = (data, datetime.now(UTC))

    def get(self, bucket: str, key: str) -> bytes | None:
        """Read an object's bytes (test helper, not counted)"""
        entry = self._buckets.get(bucket, {}).get(key)
        return entry[0] if entry else None

    def keys(self, bucket: str) -> list[str]:
        return sorted(self._buckets.get(bucket, {}))

    async def exists(self, bucket: str, key: str) -> bool:
        self.calls["exists"] += 1
        return key in self._buckets.get(bucket, {})

    async def copy(self, src_bucket: str, src_key: str, dst_bucket: str, dst_key: str) -> None:
        self.calls["copy"] += 1
        entry = self._buckets.get(src_bucket, {}).get(src_key)
        if entry is None:
            raise ObjectNotFoundError(src_bucket, src_key)
        self._buckets.setdefault(dst_bucket, {})[dst_key] = (entry[0], datetime.now(UTC))

    async def delete(self, bucket: str, key: str) -> None:
        self.calls["delete"] += 1
        self._buckets.get(bucket, {}).pop(key, None)

    async def list(self, bucket: str, prefix: str, limit: int | None = None) -> list[ObjectSummary]:
        self.calls["list"] += 1
        objects = self._buckets.get(bucket, {})
        summaries = [
            ObjectSummary(
                bucket=bucket,
                key=key,
                size=len(data),
                last_modified=modified,
                storage_class="STANDARD",
            )
            for key, (data, modified) in sorted(objects.items())
            if key.startswith(prefix)
        ]
        return summaries[:limit] if limit is not None else summaries
