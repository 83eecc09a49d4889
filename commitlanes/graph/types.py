"""Types and constants for commit graph layout."""

from dataclasses import dataclass, field

from PySide6.QtGui import QColor

from commitlanes.constants import LANE_COLOR_HEX, PALETTE_SIZE


@dataclass(frozen=True)
class CommitRecord:
    """A commit as delivered by the repository collaborator.

    Only ``id`` and ``parent_ids`` matter to the layout; the rest is carried
    through for the renderer.
    """

    id: str
    parent_ids: tuple[str, ...] = ()
    timestamp: int = 0
    labels: tuple[str, ...] = ()
    summary: str = ""

    @property
    def short_id(self) -> str:
        return self.id[:7]


@dataclass(frozen=True)
class GraphNode:
    """One row of the graph: a commit, its lane, and how other lanes relate to it.

    - passing_lanes: lanes crossing the row untouched
    - forking_off_lanes: lanes that end here going up (more children above)
    - merging_lanes: lanes that start here going down (extra parents below)
    """

    commit: CommitRecord
    row: int
    lane: int
    parent_count: int
    child_count: int
    passing_lanes: frozenset[int] = field(default_factory=frozenset)
    forking_off_lanes: frozenset[int] = field(default_factory=frozenset)
    merging_lanes: frozenset[int] = field(default_factory=frozenset)
    # Presentation only; two rows with the same layout are equal whatever the palette
    palette_size: int = field(default=PALETTE_SIZE, compare=False, repr=False)

    @property
    def color_index(self) -> int:
        return lane_color_index(self.lane, self.palette_size)

    @property
    def width(self) -> int:
        """Number of lane columns this row touches."""
        lanes = self.passing_lanes | self.forking_off_lanes | self.merging_lanes
        return max(lanes | {self.lane}) + 1


def lane_color_index(position: int, palette_size: int = PALETTE_SIZE) -> int:
    """Color slot for a lane position."""
    if palette_size <= 0:
        raise ValueError(f"palette_size must be positive, got {palette_size}")
    return position % palette_size


# Colors for different lanes
LANE_COLORS = [QColor(hex_color) for hex_color in LANE_COLOR_HEX]


def get_lane_color(position: int) -> QColor:
    """Get color for a lane position."""
    return LANE_COLORS[lane_color_index(position, len(LANE_COLORS))]
