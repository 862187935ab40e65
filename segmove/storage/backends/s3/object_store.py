"""
S3 Object Store

AWS S3 (and S3-compatible: MinIO, OSS, LocalStack) implementation of the
object store using server-side copies, so segment bytes never pass
through the mover's host.

Requires: pip install aioboto3
"""

from __future__ import annotations

import asyncio
from typing import Any

from segmove.core.exceptions import MissingDependencyError
from segmove.core.logger import get_logger
from segmove.storage.core import (
    ConnectionError,
    ObjectNotFoundError,
    StorageError,
    StorageTransientError,
)
from segmove.storage.interfaces import ObjectStore, ObjectSummary

try:
    import aioboto3
    from botocore.exceptions import BotoCoreError, ClientError

    AIOBOTO3_AVAILABLE = True
except ImportError:
    AIOBOTO3_AVAILABLE = False  # pragma: no cover
    aioboto3 = None  # pragma: no cover
    BotoCoreError = ClientError = None  # pragma: no cover

logger = get_logger(__name__)

# Error codes meaning "the object (or its bucket) is not there"
_MISSING_KEY_CODES = frozenset({"404", "NoSuchKey", "NotFound"})
_MISSING_BUCKET_CODES = frozenset({"NoSuchBucket"})

# Error codes worth retrying by the caller
_TRANSIENT_CODES = frozenset(
    {
        "500",
        "502",
        "503",
        "504",
        "InternalError",
        "RequestTimeout",
        "RequestTimeTooSkewed",
        "ServiceUnavailable",
        "SlowDown",
        "Throttling",
        "ThrottlingException",
    }
)


def _error_code(error: Exception) -> str:
    """Extract the S3 error code (or HTTP status) from a ClientError"""
    response = getattr(error, "response", None) or {}
    code = response.get("Error", {}).get("Code")
    if code:
        return str(code)
    status = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return str(status) if status else ""


class S3ObjectStore(ObjectStore):
    """
    S3 implementation of the object store.

    Example:
        >>> store = S3ObjectStore(region_name="us-east-1")
        >>> async with store:
        ...     if await store.exists("main", "base/ds/index.zip"):
        ...         await store.copy("main", "base/ds/index.zip", "archive", "base/ds/index.zip")
    """

    def __init__(
        self,
        region_name: str = "us-east-1",
        endpoint_url: str | None = None,
        **s3_kwargs,
    ):
        """
        Initialize S3 object store.

        Args:
            region_name: AWS region
            endpoint_url: Custom endpoint for S3-compatible stores
            **s3_kwargs: Extra client arguments (aws_access_key_id, ...)
        """
        if not AIOBOTO3_AVAILABLE:
            msg = "aioboto3"
            raise MissingDependencyError(msg, "S3 object store backend")

        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.s3_kwargs = s3_kwargs
        self._session = None
        self._s3_client = None
        self._lock = asyncio.Lock()

    async def _get_s3_client(self):
        """Get S3 client, creating if necessary"""
        async with self._lock:
            if self._s3_client is None:
                client_kwargs: dict[str, Any] = {"region_name": self.region_name, **self.s3_kwargs}
                if self.endpoint_url:
                    client_kwargs["endpoint_url"] = self.endpoint_url
                try:
                    self._session = aioboto3.Session()
                    self._s3_client = await self._session.client("s3", **client_kwargs).__aenter__()
                except Exception as e:
                    msg = f"Failed to create S3 client: {e}"
                    raise ConnectionError(msg, backend="s3", url=self.endpoint_url) from e

        return self._s3_client

    def _translate(self, error: Exception, operation: str, bucket: str, key: str) -> StorageError:
        """Map a botocore error onto the storage error hierarchy"""
        if isinstance(error, ClientError):
            code = _error_code(error)
            if code in _MISSING_KEY_CODES:
                return ObjectNotFoundError(bucket, key)
            if code in _TRANSIENT_CODES:
                return StorageTransientError(
                    f"S3 {operation} failed on {bucket}/{key}: {code}",
                    operation=operation,
                    code=code,
                )
            return StorageError(
                f"S3 {operation} failed on {bucket}/{key}: {code or error}",
                details={"operation": operation, "code": code},
            )
        return StorageTransientError(
            f"S3 {operation} failed on {bucket}/{key}: {error}",
            operation=operation,
        )

    async def exists(self, bucket: str, key: str) -> bool:
        s3 = await self._get_s3_client()
        try:
            await s3.head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as e:
            code = _error_code(e)
            if code in _MISSING_KEY_CODES or code in _MISSING_BUCKET_CODES:
                return False
            raise self._translate(e, "exists", bucket, key) from e
        except BotoCoreError as e:
            raise self._translate(e, "exists", bucket, key) from e

    async def copy(self, src_bucket: str, src_key: str, dst_bucket: str, dst_key: str) -> None:
        s3 = await self._get_s3_client()
        try:
            await s3.copy_object(
                Bucket=dst_bucket,
                Key=dst_key,
                CopySource={"Bucket": src_bucket, "Key": src_key},
            )
        except (ClientError, BotoCoreError) as e:
            raise self._translate(e, "copy", src_bucket, src_key) from e

        logger.debug(f"Copied s3://{src_bucket}/{src_key} -> s3://{dst_bucket}/{dst_key}")

    async def delete(self, bucket: str, key: str) -> None:
        s3 = await self._get_s3_client()
        try:
            await s3.delete_object(Bucket=bucket, Key=key)
        except ClientError as e:
            code = _error_code(e)
            if code in _MISSING_KEY_CODES or code in _MISSING_BUCKET_CODES:
                return
            raise self._translate(e, "delete", bucket, key) from e
        except BotoCoreError as e:
            raise self._translate(e, "delete", bucket, key) from e

    async def list(self, bucket: str, prefix: str, limit: int | None = None) -> list[ObjectSummary]:
        s3 = await self._get_s3_client()
        summaries: list[ObjectSummary] = []

        try:
            paginator = s3.get_paginator("list_objects_v2")
            async for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    summaries.append(
                        ObjectSummary(
                            bucket=bucket,
                            key=obj["Key"],
                            size=obj.get("Size", 0),
                            last_modified=obj.get("LastModified"),
                            storage_class=obj.get("StorageClass"),
                            etag=obj.get("ETag"),
                        )
                    )
                    if limit is not None and len(summaries) >= limit:
                        return summaries
        except ClientError as e:
            if _error_code(e) in _MISSING_BUCKET_CODES:
                return []
            raise self._translate(e, "list", bucket, prefix) from e
        except BotoCoreError as e:
            raise self._translate(e, "list", bucket, prefix) from e

        return summaries

    async def close(self) -> None:
        """Close S3 client"""
        if self._s3_client:
            await self._s3_client.__aexit__(None, None, None)
            self._s3_client = None
            self._session = None

    async def __aenter__(self):
        await self._get_s3_client()
        return self
