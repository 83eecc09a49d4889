"""Row classification - how each lane relates to the commit on a row."""

from collections.abc import Sequence, Set
from typing import NamedTuple


class RowLanes(NamedTuple):
    passing: frozenset[int]
    forking_off: frozenset[int]
    merging: frozenset[int]


def classify_row(
    active_lanes: Set[int],
    own_lane: int,
    parent_lanes: Sequence[int],
    child_lanes: Sequence[int],
) -> RowLanes:
    """
    Split the lanes around one commit into passing, forking-off and merging.

    Args:
        active_lanes: Lanes in use when the row is entered (before this commit
            claims or opens anything)
        own_lane: The commit's lane
        parent_lanes: Lane of each parent in parent order; the first entry is
            the commit's own lane handed down to its first parent
        child_lanes: Lanes reserved for this commit by already-visited
            children; one per child

    Returns:
        RowLanes where forking_off holds the child lanes that end at this
        commit besides its own, merging holds the lanes opened for the second
        and later parents, and passing holds everything else that was active.
    """
    reserved = frozenset(child_lanes)
    forking_off = reserved - {own_lane}
    merging = frozenset(parent_lanes[1:]) - {own_lane}
    passing = frozenset(active_lanes) - reserved - merging - {own_lane}
    return RowLanes(passing=passing, forking_off=forking_off, merging=merging)
