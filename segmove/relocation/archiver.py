"""
Segment archiving: move segments between the configured main and archive
locations.
"""

from segmove.core.config import RelocationConfig, get_config
from segmove.core.exceptions import InvalidSpecError
from segmove.core.logger import get_logger
from segmove.core.types import DataSegment
from segmove.relocation.mover import MoveOutcome, SegmentMover

logger = get_logger(__name__)


class SegmentArchiver:
    """
    Archives segments to cold storage and restores them.

    archive() and restore() return the moved descriptor, or None when the
    segment already sits at the requested location, so callers only
    persist descriptors that actually changed.

    Example:
        >>> archiver = SegmentArchiver(mover, RelocationConfig(
        ...     main_bucket="segments", main_base_key="prod",
        ...     archive_bucket="segments-archive", archive_base_key="prod",
        ... ))
        >>> archived = await archiver.archive(segment)
    """

    def __init__(self, mover: SegmentMover, config: RelocationConfig | None = None):
        self.mover = mover
        self.config = config or get_config()

    async def archive(self, segment: DataSegment) -> DataSegment | None:
        target = self.config.archive_target
        if target is None:
            msg = "Archive location is not configured (archive_bucket/archive_base_key)"
            raise InvalidSpecError(msg, field="archive_bucket", segment_id=segment.identifier)
        return await self._move(segment, target, "archive")

    async def restore(self, segment: DataSegment) -> DataSegment | None:
        target = self.config.main_target
        if target is None:
            msg = "Main location is not configured (main_bucket/main_base_key)"
            raise InvalidSpecError(msg, field="main_bucket", segment_id=segment.identifier)
        return await self._move(segment, target, "restore")

    async def _move(self, segment: DataSegment, target: dict[str, str], action: str) -> DataSegment | None:
        result = await self.mover.relocate(segment, target)
        if result.outcome is MoveOutcome.NOOP:
            logger.info(f"Segment {segment.identifier} already in place, nothing to {action}")
            return None
        return result.segment
