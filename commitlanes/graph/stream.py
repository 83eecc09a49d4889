"""Graph node stream - the finished, read-only result of a layout pass."""

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from commitlanes.constants import PALETTE_SIZE
from commitlanes.graph.builder import GraphBuilder
from commitlanes.graph.errors import GraphError
from commitlanes.graph.types import CommitRecord, GraphNode

logger = logging.getLogger(__name__)


class GraphNodeStream(Sequence[GraphNode]):
    """Rows of a graph, top to bottom, in input order.

    Rows are addressed by index, which is also what the selection in a view
    refers to. The content never changes once built.
    """

    def __init__(
        self,
        nodes: Iterable[GraphNode] = (),
        recovered_errors: Iterable[GraphError] = (),
        is_flat: bool = False,
    ) -> None:
        self._nodes: tuple[GraphNode, ...] = tuple(nodes)
        self._rows: dict[str, int] = {node.commit.id: node.row for node in self._nodes}
        self.recovered_errors: tuple[GraphError, ...] = tuple(recovered_errors)
        self.is_flat = is_flat

    @classmethod
    def flat(cls, commits: Iterable[CommitRecord]) -> "GraphNodeStream":
        """Fallback rows with every commit on lane 0 and no lane relations."""
        nodes = [
            GraphNode(
                commit=commit,
                row=row,
                lane=0,
                parent_count=len(commit.parent_ids),
                child_count=0,
            )
            for row, commit in enumerate(commits)
        ]
        return cls(nodes, is_flat=True)

    @overload
    def __getitem__(self, index: int) -> GraphNode: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[GraphNode, ...]: ...

    def __getitem__(self, index: int | slice) -> GraphNode | tuple[GraphNode, ...]:
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphNodeStream):
            return NotImplemented
        return self._nodes == other._nodes

    def __repr__(self) -> str:
        return f"GraphNodeStream(rows={len(self)}, lanes={self.lane_count}, flat={self.is_flat})"

    def row_of(self, commit_id: str) -> int | None:
        """Row index of a commit, or None when it is not in the graph."""
        return self._rows.get(commit_id)

    @property
    def lane_count(self) -> int:
        """Columns needed to draw every row."""
        return max((node.width for node in self._nodes), default=0)


def build_graph(
    commits: Iterable[CommitRecord],
    palette_size: int = PALETTE_SIZE,
) -> GraphNodeStream:
    """
    Run a complete layout pass.

    The input is materialized first so parents missing from it can be
    recognized at their child's row. Nothing is returned unless the whole
    pass succeeds.
    """
    commit_list = list(commits)
    builder = GraphBuilder(
        palette_size=palette_size,
        known_ids={commit.id for commit in commit_list},
    )
    nodes = list(builder.process(commit_list))
    if builder.recovered_errors:
        logger.info("Graph built with %d recovered input faults", len(builder.recovered_errors))
    return GraphNodeStream(nodes, recovered_errors=builder.recovered_errors)
