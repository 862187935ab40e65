"""
Pytest configuration and shared fixtures for segment relocation tests
"""

import pytest

from segmove.core.logger import set_logger
from segmove.core.types import DataSegment, Interval
from segmove.monitoring.metrics import MoveMetrics
from segmove.relocation.mover import SegmentMover
from segmove.storage.backends.memory import InMemoryObjectStore

SOURCE_KEY = "baseKey/test/2013-01-01T00:00:00.000Z_2013-01-02T00:00:00.000Z/1/0/index.zip"
TARGET_KEY = "targetBaseKey/test/2013-01-01T00:00:00.000Z_2013-01-02T00:00:00.000Z/1/0/index.zip"
ARCHIVE_TARGET = {"baseKey": "targetBaseKey", "bucket": "archive"}


def make_segment(bucket: str = "main", key: str = SOURCE_KEY, **load_spec_extra) -> DataSegment:
    """Segment test/2013-01-01/2013-01-02 version 1 partition 0"""
    return DataSegment(
        data_source="test",
        interval=Interval.parse("2013-01-01/2013-01-02"),
        version="1",
        load_spec={"key": key, "bucket": bucket, **load_spec_extra},
        partition_num=0,
        dimensions=("dim1", "dim1"),
        metrics=("metric1", "metric2"),
        binary_version=0,
        size=1,
    )


@pytest.fixture(autouse=True)
def reset_custom_logger():
    """Make sure no test leaks a custom logger into the next one."""
    yield
    set_logger(None)


@pytest.fixture
def source_key() -> str:
    return SOURCE_KEY


@pytest.fixture
def target_key() -> str:
    return TARGET_KEY


@pytest.fixture
def archive_target() -> dict[str, str]:
    return dict(ARCHIVE_TARGET)


@pytest.fixture
def segment_factory():
    """Build segments with a custom bucket/key (make_segment)."""
    return make_segment


@pytest.fixture
def source_segment() -> DataSegment:
    return make_segment()


@pytest.fixture
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def metrics() -> MoveMetrics:
    return MoveMetrics()


@pytest.fixture
def mover(store, metrics) -> SegmentMover:
    return SegmentMover(store, metrics=metrics)
