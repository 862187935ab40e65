"""
Object Store Factory - simplified API for creating object store backends

Creates backends by name or from a storage URL without importing the
backend classes (and their optional dependencies) directly.
"""

from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlparse

from segmove.storage.backends.memory import InMemoryObjectStore
from segmove.storage.interfaces import ObjectStore


def _create_filesystem_store(kwargs: dict[str, Any]) -> ObjectStore:
    """Create filesystem object store instance."""
    from segmove.storage.backends.filesystem import FilesystemObjectStore

    return FilesystemObjectStore(
        base_path=kwargs.get("base_path", "./segmove-data"),
        chunk_size=kwargs.get("chunk_size", 1024 * 1024),
    )


def _create_s3_store(kwargs: dict[str, Any]) -> ObjectStore:
    """Create S3 object store instance."""
    from segmove.storage.backends.s3 import S3ObjectStore

    options = dict(kwargs)
    region_name = options.pop("region_name", "us-east-1")
    endpoint_url = options.pop("endpoint_url", None)
    return S3ObjectStore(region_name=region_name, endpoint_url=endpoint_url, **options)


# Backend registry mapping backend names to factory functions
_STORE_REGISTRY = {
    "memory": lambda kwargs: InMemoryObjectStore(),
    "filesystem": _create_filesystem_store,
    "file": _create_filesystem_store,
    "local": _create_filesystem_store,
    "s3": _create_s3_store,
}


def create_object_store(backend: str = "memory", **kwargs) -> ObjectStore:
    """
    Create an object store backend with a simple, unified API.

    Args:
        backend: "memory", "filesystem" (aliases "file", "local") or "s3"
        **kwargs: Backend options (base_path for filesystem; region_name,
                  endpoint_url and client arguments for s3)

    Raises:
        ValueError: If an unknown backend is specified
        MissingDependencyError: If required packages aren't installed

    Examples:
        >>> store = create_object_store("memory")
        >>> store = create_object_store("filesystem", base_path="/var/lib/segments")
        >>> store = create_object_store("s3", region_name="eu-west-1")
    """
    backend = backend.lower().strip()

    if backend not in _STORE_REGISTRY:
        msg = (
            f"Unknown object store backend: '{backend}'\n"
            f"Available backends: memory, filesystem, s3"
        )
        raise ValueError(msg)

    return _STORE_REGISTRY[backend](kwargs)


def create_object_store_from_url(url: str, **options) -> ObjectStore:
    """
    Create an object store from a storage URL.

    Supported URLs:
        memory://
        file:///absolute/path  (or file://./relative/path)
        s3://?region=eu-west-1&endpoint=http://localhost:4566

    Explicit keyword options override values parsed from the URL.
    """
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    query = dict(parse_qsl(parsed.query))

    if scheme == "memory":
        return create_object_store("memory")

    if scheme == "file":
        base_path = Path(parsed.netloc + parsed.path) if parsed.netloc else Path(parsed.path)
        return create_object_store("filesystem", **{"base_path": base_path, **options})

    if scheme == "s3":
        s3_options: dict[str, Any] = {}
        if "region" in query:
            s3_options["region_name"] = query["region"]
        if "endpoint" in query:
            s3_options["endpoint_url"] = query["endpoint"]
        return create_object_store("s3", **{**s3_options, **options})

    msg = f"Unsupported storage URL: {url!r} (expected memory://, file:// or s3://)"
    raise ValueError(msg)
