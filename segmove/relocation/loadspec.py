"""
Load spec resolution.

Pure translation between a segment's storage coordinates (``bucket`` +
``key`` in its load spec) and the coordinates a relocation target asks for.
No I/O happens here, so every precondition failure surfaces before the
object store is touched.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from segmove.core.exceptions import InvalidSpecError
from segmove.core.types import LOAD_SPEC_BUCKET, LOAD_SPEC_KEY, DataSegment

TARGET_BUCKET = "bucket"
TARGET_BASE_KEY = "baseKey"


@dataclass(frozen=True)
class StorageCoordinates:
    """Location of one stored object"""

    bucket: str
    key: str

    def __str__(self) -> str:
        return f"{self.bucket}/{self.key}"


def _required_str(
    mapping: Any,
    field: str,
    what: str,
    segment_id: str | None,
    strip: bool = False,
) -> str:
    if not isinstance(mapping, Mapping):
        msg = f"{what} must be a mapping, got {type(mapping).__name__}"
        raise InvalidSpecError(msg, field=field, segment_id=segment_id)

    value = mapping.get(field)
    if value is None:
        msg = f"{what} is missing '{field}'"
        raise InvalidSpecError(msg, field=field, segment_id=segment_id)

    text = str(value).strip() if strip else str(value)
    if not text.strip():
        msg = f"{what} has an empty '{field}'"
        raise InvalidSpecError(msg, field=field, segment_id=segment_id)
    return text


def key_suffix(key: str, segment: DataSegment | None = None) -> str:
    """
    Return the part of ``key`` that follows its base key.

    With the segment at hand the suffix starts at the segment's storage dir
    (data_source/interval/version/partition), wherever the base key ends.
    Otherwise, or when the key doesn't follow that layout, the base key is
    taken to be the first path component.
    """
    if segment is not None:
        storage_dir = segment.storage_dir
        if key.startswith(storage_dir + "/"):
            return key
        index = key.find("/" + storage_dir + "/")
        if index >= 0:
            return key[index + 1 :]

    _, sep, rest = key.partition("/")
    return rest if sep and rest else key


def join_key(base_key: str, suffix: str) -> str:
    """Join a base key and a suffix with exactly one separator"""
    base = base_key.strip("/")
    return f"{base}/{suffix}" if base else suffix


class LoadSpecResolver:
    """
    Resolves source and target coordinates of a relocation.

    Example:
        >>> resolver = LoadSpecResolver()
        >>> resolver.resolve(
        ...     {"type": "s3_zip", "bucket": "main", "key": "baseKey/test/.../0/index.zip"},
        ...     {"bucket": "archive", "baseKey": "targetBaseKey"},
        ... )
        {'type': 's3_zip', 'bucket': 'archive', 'key': 'targetBaseKey/test/.../0/index.zip'}
    """

    def source_coordinates(
        self, load_spec: Mapping[str, Any], segment_id: str | None = None
    ) -> StorageCoordinates:
        """
        Coordinates the load spec currently points at.

        Raises:
            InvalidSpecError: If bucket or key is absent or empty
        """
        bucket = _required_str(load_spec, LOAD_SPEC_BUCKET, "Load spec", segment_id, strip=True)
        key = _required_str(load_spec, LOAD_SPEC_KEY, "Load spec", segment_id)
        return StorageCoordinates(bucket=bucket, key=key)

    def target_coordinates(
        self,
        load_spec: Mapping[str, Any],
        target: Mapping[str, Any],
        segment: DataSegment | None = None,
    ) -> StorageCoordinates:
        """
        Coordinates the segment will occupy after relocation.

        Raises:
            InvalidSpecError: If the load spec or target misses a required field
        """
        segment_id = segment.identifier if segment is not None else None
        source = self.source_coordinates(load_spec, segment_id)
        bucket = _required_str(target, TARGET_BUCKET, "Relocation target", segment_id, strip=True)
        base_key = _required_str(target, TARGET_BASE_KEY, "Relocation target", segment_id)
        return StorageCoordinates(
            bucket=bucket,
            key=join_key(base_key, key_suffix(source.key, segment)),
        )

    def resolve(
        self,
        load_spec: Mapping[str, Any],
        target: Mapping[str, Any],
        segment: DataSegment | None = None,
    ) -> dict[str, Any]:
        """
        Build the target load spec.

        A copy of load_spec with bucket and key overwritten; every other
        entry passes through unchanged.
        """
        coordinates = self.target_coordinates(load_spec, target, segment)
        return {
            **dict(load_spec),
            LOAD_SPEC_BUCKET: coordinates.bucket,
            LOAD_SPEC_KEY: coordinates.key,
        }
