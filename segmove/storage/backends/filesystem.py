"""
Filesystem Object Store

Local directory implementation for development and single-node deployments.
Each bucket is a directory under ``base_path`` and each key a file path
relative to it:

    base_path/
    ├── main/
    │   └── baseKey/wiki/2013-01-01T00:00:00.000Z_.../1/0/index.zip
    └── archive/
        └── ...

Copies are streamed through a temporary file and renamed into place, so a
reader never observes a partially written target.

Requires: pip install aiofiles
"""

from __future__ import annotations

import os
import uuid
from datetime import UTC, datetime
from pathlib import Path

from segmove.core.exceptions import MissingDependencyError
from segmove.core.logger import get_logger
from segmove.storage.core import ObjectNotFoundError, StorageError
from segmove.storage.interfaces import ObjectStore, ObjectSummary

try:
    import aiofiles

    AIOFILES_AVAILABLE = True
except ImportError:
    AIOFILES_AVAILABLE = False  # pragma: no cover
    aiofiles = None  # pragma: no cover

logger = get_logger(__name__)


class FilesystemObjectStore(ObjectStore):
    """
    Filesystem-based object store.

    Example:
        >>> store = FilesystemObjectStore(base_path="/var/lib/segments")
        >>> await store.copy("main", "a/index.zip", "archive", "a/index.zip")
    """

    def __init__(self, base_path: str | Path = "./segmove-data", chunk_size: int = 1024 * 1024):
        """
        Initialize filesystem object store.

        Args:
            base_path: Root directory; buckets are its subdirectories
            chunk_size: Read/write chunk size used when copying
        """
        if not AIOFILES_AVAILABLE:
            msg = "aiofiles"
            raise MissingDependencyError(msg, "Filesystem object store backend")

        self.base_path = Path(base_path)
        self.chunk_size = chunk_size
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _bucket_dir(self, bucket: str) -> Path:
        if not bucket or "/" in bucket or bucket in (".", ".."):
            msg = f"Invalid bucket name: {bucket!r}"
            raise StorageError(msg, details={"bucket": bucket})
        return self.base_path / bucket

    def _object_path(self, bucket: str, key: str) -> Path:
        bucket_dir = self._bucket_dir(bucket)
        path = bucket_dir / key
        resolved_bucket = bucket_dir.resolve()
        if not key or not path.resolve().is_relative_to(resolved_bucket):
            msg = f"Invalid object key: {key!r}"
            raise StorageError(msg, details={"bucket": bucket, "key": key})
        return path

    async def exists(self, bucket: str, key: str) -> bool:
        return self._object_path(bucket, key).is_file()

    async def copy(self, src_bucket: str, src_key: str, dst_bucket: str, dst_key: str) -> None:
        src = self._object_path(src_bucket, src_key)
        dst = self._object_path(dst_bucket, dst_key)

        if not src.is_file():
            raise ObjectNotFoundError(src_bucket, src_key)

        if src.resolve() == dst.resolve():
            return

        tmp = dst.with_name(f".{dst.name}.{uuid.uuid4().hex}.tmp")
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(src, "rb") as reader, aiofiles.open(tmp, "wb") as writer:
                while chunk := await reader.read(self.chunk_size):
                    await writer.write(chunk)
            os.replace(tmp, dst)
        except FileNotFoundError as e:
            tmp.unlink(missing_ok=True)
            raise ObjectNotFoundError(src_bucket, src_key) from e
        except OSError as e:
            tmp.unlink(missing_ok=True)
            msg = f"Failed to copy {src_bucket}/{src_key} to {dst_bucket}/{dst_key}: {e}"
            raise StorageError(msg) from e

        logger.debug(f"Copied {src} -> {dst}")

    async def delete(self, bucket: str, key: str) -> None:
        path = self._object_path(bucket, key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            msg = f"Failed to delete {bucket}/{key}: {e}"
            raise StorageError(msg) from e
        self._prune_empty_dirs(path.parent, self._bucket_dir(bucket))

    def _prune_empty_dirs(self, directory: Path, stop_at: Path) -> None:
        """Remove now-empty parent directories up to (not including) the bucket dir"""
        stop_at = stop_at.resolve()
        current = directory.resolve()
        while current != stop_at and current.is_relative_to(stop_at):
            try:
                current.rmdir()
            except OSError:
                break
            current = current.parent

    async def list(self, bucket: str, prefix: str, limit: int | None = None) -> list[ObjectSummary]:
        bucket_dir = self._bucket_dir(bucket)
        if not bucket_dir.is_dir():
            return []

        candidates = sorted(
            (path.relative_to(bucket_dir).as_posix(), path)
            for path in bucket_dir.rglob("*")
            if path.is_file() and not (path.name.startswith(".") and path.name.endswith(".tmp"))
        )

        summaries = []
        for key, path in candidates:
            if not key.startswith(prefix):
                continue
            stat = path.stat()
            summaries.append(
                ObjectSummary(
                    bucket=bucket,
                    key=key,
                    size=stat.st_size,
                    last_modified=datetime.fromtimestamp(stat.st_mtime, UTC),
                )
            )
            if limit is not None and len(summaries) >= limit:
                break

        return summaries
