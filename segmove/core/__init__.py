"""
Core segmove types, errors, logging and configuration.
"""

from segmove.core.config import RelocationConfig, configure, get_config
from segmove.core.exceptions import (
    InvalidSpecError,
    MissingDependencyError,
    SegmentLoadingError,
    SegmentMissingError,
    SegmoveError,
)
from segmove.core.logger import get_logger, set_logger
from segmove.core.types import DataSegment, Interval

__all__ = [
    "DataSegment",
    "Interval",
    "InvalidSpecError",
    "MissingDependencyError",
    "RelocationConfig",
    "SegmentLoadingError",
    "SegmentMissingError",
    "SegmoveError",
    "configure",
    "get_config",
    "get_logger",
    "set_logger",
]
