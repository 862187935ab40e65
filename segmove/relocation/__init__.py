"""
Segment relocation: load spec resolution, the move decision table, the
mover and the archive/restore layer on top of it.
"""

from segmove.relocation.archiver import SegmentArchiver
from segmove.relocation.decision import MoveAction, decide
from segmove.relocation.loadspec import LoadSpecResolver, StorageCoordinates, join_key, key_suffix
from segmove.relocation.mover import MoveOutcome, MoveResult, SegmentMover, create_mover

__all__ = [
    "LoadSpecResolver",
    "MoveAction",
    "MoveOutcome",
    "MoveResult",
    "SegmentArchiver",
    "SegmentMover",
    "StorageCoordinates",
    "create_mover",
    "decide",
    "join_key",
    "key_suffix",
]
