"""
segmove object store backends.

Available backends:
- memory: In-memory store for testing and dry runs
- filesystem: Local directory per bucket
- s3: AWS S3 and S3-compatible stores
"""

# Imported lazily to avoid import errors when optional dependencies are missing

__all__ = [
    "FilesystemObjectStore",
    "InMemoryObjectStore",
    "S3ObjectStore",
]


_BACKEND_IMPORTS = {
    "InMemoryObjectStore": ("memory", "InMemoryObjectStore"),
    "FilesystemObjectStore": ("filesystem", "FilesystemObjectStore"),
    "S3ObjectStore": ("s3", "S3ObjectStore"),
}


def __getattr__(name: str):
    """Lazy import of object store backends."""
    if name in _BACKEND_IMPORTS:
        module_name, class_name = _BACKEND_IMPORTS[name]
        module = __import__(f"segmove.storage.backends.{module_name}", fromlist=[class_name])
        return getattr(module, class_name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
