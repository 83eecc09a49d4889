"""Lane pool - hands out lane positions and takes them back."""

import bisect
import logging

from commitlanes.graph.errors import InvalidLaneRelease

logger = logging.getLogger(__name__)


class LanePool:
    """Tracks which lane positions are in use for one layout pass.

    Released positions go on a sorted free list and the smallest one is
    handed out first, so the graph stays as narrow as the number of branches
    open at the same time rather than the number of branches ever seen.
    """

    def __init__(self) -> None:
        self._active: set[int] = set()
        self._free: list[int] = []
        self._high_water = 0

    def allocate(self) -> int:
        """Return the smallest free position, growing the pool if none is free."""
        if self._free:
            position = self._free.pop(0)
        else:
            position = self._high_water
            self._high_water += 1
        self._active.add(position)
        return position

    def release(self, position: int) -> None:
        """Put an active position back on the free list."""
        if position not in self._active:
            raise InvalidLaneRelease(position)
        self._active.remove(position)
        bisect.insort(self._free, position)

    def active_count(self) -> int:
        return len(self._active)

    def is_active(self, position: int) -> bool:
        return position in self._active

    @property
    def active_positions(self) -> frozenset[int]:
        return frozenset(self._active)

    @property
    def free_positions(self) -> tuple[int, ...]:
        return tuple(self._free)

    @property
    def high_water_mark(self) -> int:
        """One past the largest position ever handed out."""
        return self._high_water
