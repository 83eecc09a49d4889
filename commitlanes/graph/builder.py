"""Graph builder - assigns lanes to a child-before-parent commit sequence in one pass."""

import logging
from collections.abc import Collection, Iterable, Iterator

from commitlanes.constants import PALETTE_SIZE
from commitlanes.graph.classifier import classify_row
from commitlanes.graph.errors import (
    DuplicateParentReference,
    GraphError,
    MalformedInput,
    MissingParent,
)
from commitlanes.graph.lane_pool import LanePool
from commitlanes.graph.types import CommitRecord, GraphNode

logger = logging.getLogger(__name__)


class GraphBuilder:
    """
    Lays out one commit sequence into graph rows.

    Each visited commit hands its lane to its first parent and opens a fresh
    lane for every other parent. Those reservations wait in ``_pending`` until
    the parent's own row comes up. A parent reserved by several children keeps
    the lowest of those lanes; the rest fork off there and go back to the pool
    before that row opens lanes for its extra parents, so one position may end
    above a marker and start again below it.

    A builder owns its pool and reservations and is good for a single pass.
    """

    def __init__(
        self,
        palette_size: int = PALETTE_SIZE,
        known_ids: Collection[str] | None = None,
    ) -> None:
        self.palette_size = palette_size
        self.known_ids = known_ids
        self.recovered_errors: list[GraphError] = []
        self.peak_lane_count = 0

        self._pool = LanePool()
        # parent id -> [(lane, child id)] in reservation order
        self._pending: dict[str, list[tuple[int, str]]] = {}
        self._visited: set[str] = set()
        self._started = False

    @property
    def pool(self) -> LanePool:
        return self._pool

    def process(self, commits: Iterable[CommitRecord]) -> Iterator[GraphNode]:
        """Lazily yield one GraphNode per commit, in input order.

        Raises:
            RuntimeError: If this builder already ran a pass
        """
        if self._started:
            raise RuntimeError("GraphBuilder is single-use; create a new one for a fresh pass")
        self._started = True
        return self._run(commits)

    def _run(self, commits: Iterable[CommitRecord]) -> Iterator[GraphNode]:
        row = -1
        for row, commit in enumerate(commits):
            yield self._visit(row, commit)
        self._release_unresolved()
        logger.debug("Laid out %d rows in at most %d lanes", row + 1, self.peak_lane_count)

    def _visit(self, row: int, commit: CommitRecord) -> GraphNode:
        if commit.id in self._visited:
            raise MalformedInput(f"Commit {commit.short_id} appears twice in the input", commit.id)
        parents = self._effective_parents(commit)
        self._visited.add(commit.id)

        active_before = self._pool.active_positions
        reservations = self._pending.pop(commit.id, [])
        child_lanes = [lane for lane, _child in reservations]

        # Nobody was waiting for this commit: it's a branch tip
        own_lane = min(child_lanes) if child_lanes else self._pool.allocate()

        # Lanes ending here above the marker are free for parents below it
        for lane in sorted(set(child_lanes) - {own_lane}):
            self._pool.release(lane)

        parent_lanes: list[int] = []
        for index, parent_id in enumerate(parents):
            lane = own_lane if index == 0 else self._pool.allocate()
            parent_lanes.append(lane)
            self._pending.setdefault(parent_id, []).append((lane, commit.id))

        self.peak_lane_count = max(self.peak_lane_count, self._pool.active_count())

        lanes = classify_row(active_before, own_lane, parent_lanes, child_lanes)
        if not parents:
            self._pool.release(own_lane)

        return GraphNode(
            commit=commit,
            row=row,
            lane=own_lane,
            parent_count=len(parents),
            child_count=len(child_lanes),
            passing_lanes=lanes.passing,
            forking_off_lanes=lanes.forking_off,
            merging_lanes=lanes.merging,
            palette_size=self.palette_size,
        )

    def _effective_parents(self, commit: CommitRecord) -> list[str]:
        """De-duplicate parents and drop the ones known to be absent."""
        parents: list[str] = []
        seen: set[str] = set()
        for parent_id in commit.parent_ids:
            if parent_id == commit.id:
                raise MalformedInput(
                    f"Commit {commit.short_id} lists itself as a parent", commit.id
                )
            if parent_id in self._visited:
                raise MalformedInput(
                    f"Commit {commit.short_id} lists already visited {parent_id[:7]} as a parent",
                    commit.id,
                )
            if parent_id in seen:
                logger.debug("Ignoring duplicate parent %s of %s", parent_id[:7], commit.short_id)
                self.recovered_errors.append(DuplicateParentReference(commit.id, parent_id))
                continue
            seen.add(parent_id)
            if self.known_ids is not None and parent_id not in self.known_ids:
                self._record_missing(commit.id, parent_id)
                continue
            parents.append(parent_id)
        return parents

    def _release_unresolved(self) -> None:
        """Free lanes still waiting for parents the input never delivered."""
        unresolved = sorted(
            (lane, child_id, parent_id)
            for parent_id, reservations in self._pending.items()
            for lane, child_id in reservations
        )
        self._pending.clear()
        for lane, child_id, parent_id in unresolved:
            self._record_missing(child_id, parent_id)
            self._pool.release(lane)

    def _record_missing(self, commit_id: str, parent_id: str) -> None:
        error = MissingParent(commit_id, parent_id)
        logger.warning("%s; treating it as a root", error)
        self.recovered_errors.append(error)
