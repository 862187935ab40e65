"""
Segment descriptor types.

A segment is an immutable unit of stored data identified by data source,
time interval, version and partition number. Its load spec tells readers
where the data lives (for object stores: a ``bucket`` and a ``key``).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

LOAD_SPEC_BUCKET = "bucket"
LOAD_SPEC_KEY = "key"


def _parse_instant(value: str | datetime) -> datetime:
    """Parse an ISO-8601 instant, assuming UTC when no offset is given"""
    if isinstance(value, datetime):
        instant = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        instant = datetime.fromisoformat(text)

    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def format_instant(instant: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. 2013-01-01T00:00:00.000Z"""
    instant = instant.astimezone(UTC)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class Interval:
    """Half-open time interval [start, end) in UTC"""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _parse_instant(self.start))
        object.__setattr__(self, "end", _parse_instant(self.end))
        if self.end < self.start:
            msg = f"Interval end {self.end} is before start {self.start}"
            raise ValueError(msg)

    @classmethod
    def parse(cls, text: str) -> "Interval":
        """Parse the ``start/end`` notation, e.g. ``2013-01-01/2013-01-02``"""
        start, sep, end = text.partition("/")
        if not sep or not start or not end:
            msg = f"Invalid interval: {text!r}"
            raise ValueError(msg)
        return cls(_parse_instant(start), _parse_instant(end))

    def __str__(self) -> str:
        return f"{format_instant(self.start)}/{format_instant(self.end)}"


@dataclass(frozen=True)
class DataSegment:
    """
    Immutable segment descriptor.

    Identity (data_source, interval, version, partition_num) never changes
    through a relocation; only the load spec does, and only by producing a
    new descriptor via with_load_spec().

    Attributes:
        data_source: Name of the data source the segment belongs to
        interval: Time interval covered by the segment
        version: Segment version string
        load_spec: Where the segment's data lives (read-only mapping)
        partition_num: Partition number within (data_source, interval, version)
        dimensions: Dimension column names (opaque to relocation)
        metrics: Metric column names (opaque to relocation)
        binary_version: Segment format version (opaque to relocation)
        size: Segment size in bytes (opaque to relocation)
    """

    data_source: str
    interval: Interval
    version: str
    load_spec: Mapping[str, Any]
    partition_num: int = 0
    dimensions: tuple[str, ...] = ()
    metrics: tuple[str, ...] = ()
    binary_version: int | None = None
    size: int = 0
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.interval, str):
            object.__setattr__(self, "interval", Interval.parse(self.interval))
        object.__setattr__(self, "load_spec", MappingProxyType(dict(self.load_spec)))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))
        object.__setattr__(self, "dimensions", tuple(self.dimensions))
        object.__setattr__(self, "metrics", tuple(self.metrics))

    @property
    def identifier(self) -> str:
        """Unique segment id: datasource_start_end_version[_partition]"""
        base = (
            f"{self.data_source}_{format_instant(self.interval.start)}"
            f"_{format_instant(self.interval.end)}_{self.version}"
        )
        if self.partition_num:
            return f"{base}_{self.partition_num}"
        return base

    @property
    def storage_dir(self) -> str:
        """
        Default storage directory for this segment.

        The identity-derived path that segment pushers place under a base key:
        ``data_source/start_end/version/partition_num``.
        """
        return "/".join(
            [
                self.data_source,
                f"{format_instant(self.interval.start)}_{format_instant(self.interval.end)}",
                self.version,
                str(self.partition_num),
            ]
        )

    def with_load_spec(self, load_spec: Mapping[str, Any]) -> "DataSegment":
        """Return a copy of this descriptor pointing at a new load spec"""
        return replace(self, load_spec=load_spec)

    def to_dict(self) -> dict[str, Any]:
        """Convert descriptor to a JSON-friendly dictionary"""
        return {
            "dataSource": self.data_source,
            "interval": str(self.interval),
            "version": self.version,
            "loadSpec": dict(self.load_spec),
            "partitionNum": self.partition_num,
            "dimensions": list(self.dimensions),
            "metrics": list(self.metrics),
            "binaryVersion": self.binary_version,
            "size": self.size,
            **dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DataSegment":
        """Reconstruct a descriptor from its dictionary form"""
        known = {
            "dataSource",
            "interval",
            "version",
            "loadSpec",
            "partitionNum",
            "dimensions",
            "metrics",
            "binaryVersion",
            "size",
        }
        return cls(
            data_source=data["dataSource"],
            interval=Interval.parse(data["interval"]),
            version=str(data["version"]),
            load_spec=data.get("loadSpec") or {},
            partition_num=int(data.get("partitionNum", 0)),
            dimensions=tuple(data.get("dimensions") or ()),
            metrics=tuple(data.get("metrics") or ()),
            binary_version=data.get("binaryVersion"),
            size=int(data.get("size", 0)),
            extra={k: v for k, v in data.items() if k not in known},
        )
