"""
Tests for segmove exceptions.
"""

from segmove.core.exceptions import (
    InvalidSpecError,
    MissingDependencyError,
    SegmentLoadingError,
    SegmentMissingError,
    SegmoveError,
)


class TestSegmentLoadingErrors:
    def test_hierarchy(self):
        assert issubclass(InvalidSpecError, SegmentLoadingError)
        assert issubclass(SegmentMissingError, SegmentLoadingError)
        assert issubclass(SegmentLoadingError, SegmoveError)

    def test_str_includes_segment(self):
        error = SegmentLoadingError("boom", segment_id="seg-1")

        assert str(error) == "boom [segment=seg-1]"

    def test_str_without_segment(self):
        assert str(SegmentLoadingError("boom")) == "boom"

    def test_invalid_spec_field(self):
        error = InvalidSpecError("missing", field="baseKey")

        assert error.field == "baseKey"
        assert error.details == {"field": "baseKey"}

    def test_missing_carries_coordinates(self):
        error = SegmentMissingError("gone", segment_id="s", source="a/k", target="b/k")

        assert error.source == "a/k"
        assert error.target == "b/k"
        assert error.details == {"source": "a/k", "target": "b/k"}


class TestMissingDependencyError:
    def test_with_feature(self):
        error = MissingDependencyError("aioboto3", "S3 object store backend")

        assert "aioboto3" in str(error)
        assert "S3 object store backend" in str(error)
        assert "pip install 'segmove[s3]'" in str(error)

    def test_unknown_package(self):
        error = MissingDependencyError("somepkg")

        assert "pip install somepkg" in str(error)
        assert error.feature is None
