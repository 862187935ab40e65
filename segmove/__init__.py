"""
segmove - safe relocation of immutable data segments between object store buckets

Moves a segment's object from one bucket/base key to another (e.g. main to
archive) using only exists/copy/delete primitives, without ever deleting
the only copy:

- Idempotent under retries: a finished move is recognised and not redone
- Interrupted moves are detected from live existence checks
- "Already moved" and "missing" are told apart
- Pluggable object stores: in-memory, local filesystem, S3-compatible

Usage:
    >>> from segmove import DataSegment, SegmentMover, create_object_store
    >>>
    >>> mover = SegmentMover(create_object_store("s3", region_name="eu-west-1"))
    >>> moved = await mover.move(segment, {"bucket": "archive", "baseKey": "cold"})
    >>> moved.load_spec["bucket"]
    'archive'
"""

from segmove.core import (
    DataSegment,
    Interval,
    InvalidSpecError,
    MissingDependencyError,
    RelocationConfig,
    SegmentLoadingError,
    SegmentMissingError,
    SegmoveError,
    configure,
    get_config,
    get_logger,
    set_logger,
)
from segmove.relocation import (
    LoadSpecResolver,
    MoveAction,
    MoveOutcome,
    MoveResult,
    SegmentArchiver,
    SegmentMover,
    StorageCoordinates,
    create_mover,
    decide,
)
from segmove.storage import (
    InMemoryObjectStore,
    ObjectNotFoundError,
    ObjectStore,
    ObjectSummary,
    StorageError,
    StorageTransientError,
    create_object_store,
    create_object_store_from_url,
)

__version__ = "0.1.0"

__all__ = [
    "DataSegment",
    "InMemoryObjectStore",
    "Interval",
    "InvalidSpecError",
    "LoadSpecResolver",
    "MissingDependencyError",
    "MoveAction",
    "MoveOutcome",
    "MoveResult",
    "ObjectNotFoundError",
    "ObjectStore",
    "ObjectSummary",
    "RelocationConfig",
    "SegmentArchiver",
    "SegmentLoadingError",
    "SegmentMissingError",
    "SegmentMover",
    "SegmoveError",
    "StorageCoordinates",
    "StorageError",
    "StorageTransientError",
    "configure",
    "create_mover",
    "create_object_store",
    "create_object_store_from_url",
    "decide",
    "get_config",
    "get_logger",
    "set_logger",
]
