from .object_store import AIOBOTO3_AVAILABLE, S3ObjectStore

__all__ = ["AIOBOTO3_AVAILABLE", "S3ObjectStore"]
