"""
Segment Mover - relocates a segment's object between buckets.

The store only offers exists/copy/delete/list with no transactions, so the
mover re-derives what to do from live existence checks on every call:

    source  target   action
    ------  ------   -----------------------------------------
    yes     no       copy -> verify -> delete source
    no      yes      nothing, an earlier move already finished
    yes     yes      nothing, warn about the duplicate object
    no      no       fail with SegmentMissingError

The source is only ever deleted after the copy is confirmed, so a segment
is never left unresolvable at both locations. Retrying a failed or
interrupted move is always safe.

Usage:
    >>> mover = SegmentMover(create_object_store("s3"))
    >>> moved = await mover.move(segment, {"bucket": "archive", "baseKey": "prod"})
    >>> catalog.update(moved)  # persisting the new load spec is the caller's job
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from segmove.core.config import RelocationConfig, get_config
from segmove.core.exceptions import InvalidSpecError, SegmentMissingError
from segmove.core.logger import get_logger
from segmove.core.types import DataSegment
from segmove.monitoring.logging import MoveLogger, setup_move_logging
from segmove.monitoring.metrics import MoveMetrics
from segmove.relocation.decision import MoveAction, decide
from segmove.relocation.loadspec import LoadSpecResolver, StorageCoordinates
from segmove.storage.core import StorageError, StorageTransientError
from segmove.storage.factory import create_object_store_from_url
from segmove.storage.interfaces import ObjectStore, ObjectSummary

logger = get_logger(__name__)

move_logger = MoveLogger("segmove.relocation")


class MoveOutcome(Enum):
    """Terminal state of a successful move"""

    NOOP = "noop"  # target coordinates equal source coordinates
    ALREADY_MOVED = "already_moved"  # only the target exists
    DUPLICATE = "duplicate"  # both exist, nothing touched
    RELOCATED = "relocated"  # copied and source delete attempted


@dataclass(frozen=True)
class MoveResult:
    """
    Result of a move.

    Attributes:
        segment: Descriptor carrying the final load spec
        outcome: Which terminal state the move reached
        source: Coordinates before the move
        target: Coordinates after the move
        copied: Whether a copy was performed
        deleted: Whether the source object was deleted
        delete_error: Why the source delete failed, if it did
        duration_ms: Wall time of the move
    """

    segment: DataSegment
    outcome: MoveOutcome
    source: StorageCoordinates
    target: StorageCoordinates
    copied: bool = False
    deleted: bool = False
    delete_error: str | None = None
    duration_ms: float = 0.0

    @property
    def modified_storage(self) -> bool:
        """Whether the move copied or deleted anything"""
        return self.copied or self.deleted

    @property
    def source_leaked(self) -> bool:
        """Copy succeeded but the source object is still there"""
        return self.copied and not self.deleted

    def to_dict(self) -> dict[str, Any]:
        return {
            "segment_id": self.segment.identifier,
            "outcome": self.outcome.value,
            "source": str(self.source),
            "target": str(self.target),
            "copied": self.copied,
            "deleted": self.deleted,
            "delete_error": self.delete_error,
            "duration_ms": round(self.duration_ms, 2),
        }


class SegmentMover:
    """
    Moves segments between object store locations.

    The mover keeps no per-move state, so one instance can serve
    concurrent moves of different segments. Moving the same segment
    concurrently relies on the store tolerating duplicate copies and
    deletes of absent objects. No retries happen here; the caller owns
    the retry policy.

    Example:
        >>> store = InMemoryObjectStore()
        >>> mover = SegmentMover(store)
        >>> result = await mover.relocate(segment, {"bucket": "archive", "baseKey": "cold"})
        >>> result.outcome
        <MoveOutcome.RELOCATED: 'relocated'>
    """

    def __init__(
        self,
        store: ObjectStore,
        resolver: LoadSpecResolver | None = None,
        verify_copy: bool = True,
        metrics: Any = None,
        log: MoveLogger | None = None,
    ):
        """
        Initialize the mover.

        Args:
            store: Object store the segment objects live in
            resolver: Load spec resolver (default: LoadSpecResolver())
            verify_copy: Re-check the target exists after copying, before deleting
            metrics: Optional sink with record_move/record_failure/record_delete_failure
            log: Structured move logger (default: module logger)
        """
        self.store = store
        self.resolver = resolver or LoadSpecResolver()
        self.verify_copy = verify_copy
        self.metrics = metrics
        self.log = log or move_logger

    async def move(self, segment: DataSegment, target: Mapping[str, Any]) -> DataSegment:
        """
        Move a segment to the bucket/baseKey named by target.

        Returns:
            Descriptor with the updated load spec (unchanged for no-ops)

        Raises:
            InvalidSpecError: Load spec or target misses bucket/key/baseKey
            SegmentMissingError: Segment exists at neither location, the copy failed,
                or the store refused an existence check
            StorageTransientError: Passed through from the object store
        """
        result = await self.relocate(segment, target)
        return result.segment

    async def relocate(self, segment: DataSegment, target: Mapping[str, Any]) -> MoveResult:
        """Move a segment and report what was done. See move()."""
        started = time.perf_counter()
        segment_id = segment.identifier

        try:
            source = self.resolver.source_coordinates(segment.load_spec, segment_id)
            target_load_spec = self.resolver.resolve(segment.load_spec, target, segment)
            destination = self.resolver.source_coordinates(target_load_spec, segment_id)
        except InvalidSpecError as e:
            self._record_failure("invalid_spec")
            self.log.move_failed(segment_id, str(segment.load_spec.get("key", "")), "", e)
            raise

        if source == destination:
            logger.info(f"No need to move {source} onto itself")
            return self._finish(segment, MoveOutcome.NOOP, source, destination, started)

        token = self.log.set_segment_context(segment_id, str(source), str(destination))
        try:
            self.log.move_started(segment_id, str(source), str(destination))
            result = await self._execute(segment, target_load_spec, source, destination, started)
        except SegmentMissingError as e:
            self._record_failure("missing")
            self.log.move_failed(segment_id, str(source), str(destination), e)
            raise
        except StorageTransientError as e:
            self._record_failure("transient")
            self.log.move_failed(segment_id, str(source), str(destination), e)
            raise
        except StorageError as e:
            self._record_failure("storage")
            self.log.move_failed(segment_id, str(source), str(destination), e)
            msg = f"Unable to move {source} to {destination}: {e}"
            raise SegmentMissingError(
                msg, segment_id=segment_id, source=str(source), target=str(destination)
            ) from e
        finally:
            self.log.clear_segment_context(token)

        return result

    async def _execute(
        self,
        segment: DataSegment,
        target_load_spec: dict[str, Any],
        source: StorageCoordinates,
        destination: StorageCoordinates,
        started: float,
    ) -> MoveResult:
        segment_id = segment.identifier
        exists_at_target = await self.store.exists(destination.bucket, destination.key)
        exists_at_source = await self.store.exists(source.bucket, source.key)
        action = decide(exists_at_source, exists_at_target)
        moved = segment.with_load_spec(target_load_spec)

        logger.debug(
            f"Existence source={exists_at_source} target={exists_at_target} -> {action.value}"
        )

        if action is MoveAction.FAIL_MISSING:
            msg = f"Unable to move {source} to {destination}: not present in either location"
            raise SegmentMissingError(
                msg, segment_id=segment_id, source=str(source), target=str(destination)
            )

        if action is MoveAction.ALREADY_MOVED:
            logger.info(f"Not moving {source}: already present at {destination}")
            return self._finish(moved, MoveOutcome.ALREADY_MOVED, source, destination, started)

        if action is MoveAction.KEEP_DUPLICATE:
            self.log.duplicate_detected(segment_id, str(source), str(destination))
            return self._finish(moved, MoveOutcome.DUPLICATE, source, destination, started)

        await self._copy_verified(segment_id, source, destination)
        delete_error = await self._delete_source(segment_id, source)

        return self._finish(
            moved,
            MoveOutcome.RELOCATED,
            source,
            destination,
            started,
            copied=True,
            deleted=delete_error is None,
            delete_error=delete_error,
        )

    async def _copy_verified(
        self, segment_id: str, source: StorageCoordinates, destination: StorageCoordinates
    ) -> None:
        """Copy source to destination and confirm the copy landed"""
        logger.info(f"Moving {source} -> {destination}")
        try:
            await self.store.copy(source.bucket, source.key, destination.bucket, destination.key)
        except StorageTransientError:
            raise
        except Exception as e:
            msg = f"Unable to copy {source} to {destination}: {e}"
            raise SegmentMissingError(
                msg, segment_id=segment_id, source=str(source), target=str(destination)
            ) from e

        if self.verify_copy and not await self.store.exists(destination.bucket, destination.key):
            msg = f"Copy of {source} reported success but {destination} does not exist"
            raise SegmentMissingError(
                msg, segment_id=segment_id, source=str(source), target=str(destination)
            )

    async def _delete_source(self, segment_id: str, source: StorageCoordinates) -> str | None:
        """Delete the source object; failures leak the object but don't fail the move"""
        try:
            await self.store.delete(source.bucket, source.key)
        except Exception as e:
            self.log.delete_failed(segment_id, str(source), e)
            if self.metrics is not None:
                self.metrics.record_delete_failure()
            return str(e)
        return None

    async def inspect(self, segment: DataSegment) -> list[ObjectSummary]:
        """
        List the objects stored under the segment's current key.

        Diagnostic only; the move decision never depends on listings.
        """
        source = self.resolver.source_coordinates(segment.load_spec, segment.identifier)
        return await self.store.list(source.bucket, source.key)

    def _finish(
        self,
        segment: DataSegment,
        outcome: MoveOutcome,
        source: StorageCoordinates,
        destination: StorageCoordinates,
        started: float,
        **flags: Any,
    ) -> MoveResult:
        duration_ms = (time.perf_counter() - started) * 1000
        result = MoveResult(
            segment=segment,
            outcome=outcome,
            source=source,
            target=destination,
            duration_ms=duration_ms,
            **flags,
        )
        if self.metrics is not None:
            self.metrics.record_move(outcome.value, duration_ms)
        self.log.move_completed(
            segment.identifier, str(source), str(destination), outcome.value, duration_ms
        )
        return result

    def _record_failure(self, reason: str) -> None:
        if self.metrics is not None:
            self.metrics.record_failure(reason)


def create_mover(
    config: RelocationConfig | None = None,
    store: ObjectStore | None = None,
    metrics: Any = None,
) -> SegmentMover:
    """
    Build a SegmentMover from configuration.

    Args:
        config: Relocation configuration (default: the global config)
        store: Object store to use instead of the one named by config.storage_url
        metrics: Metrics sink; a MoveMetrics is created when config.metrics is set

    Logging for the segmove namespace is set up from config.log_level and
    config.json_logs.

    Example:
        >>> configure(RelocationConfig.from_env())
        >>> mover = create_mover()
    """
    config = config or get_config()
    log = setup_move_logging(config.log_level, json_format=config.json_logs)
    if store is None:
        store = create_object_store_from_url(config.storage_url, **config.storage_options)
    if metrics is None and config.metrics:
        metrics = MoveMetrics()
    return SegmentMover(store, verify_copy=config.verify_copy, metrics=metrics, log=log)
