"""
Relocation decision table.

Maps the two live existence checks onto the action the mover takes. The
protocol keeps no state between calls: a retry re-derives the same action
from whatever the store looks like now.
"""

from enum import Enum


class MoveAction(Enum):
    """What to do with a segment given where its object currently exists"""

    RELOCATE = "relocate"  # source only: copy, verify, delete source
    ALREADY_MOVED = "already_moved"  # target only: a previous move finished
    KEEP_DUPLICATE = "keep_duplicate"  # both: leave both, warn
    FAIL_MISSING = "fail_missing"  # neither: segment is gone


_DECISIONS = {
    (True, False): MoveAction.RELOCATE,
    (False, True): MoveAction.ALREADY_MOVED,
    (True, True): MoveAction.KEEP_DUPLICATE,
    (False, False): MoveAction.FAIL_MISSING,
}


def decide(exists_at_source: bool, exists_at_target: bool) -> MoveAction:
    """Pick the action for a (source, target) existence pair"""
    return _DECISIONS[(bool(exists_at_source), bool(exists_at_target))]
