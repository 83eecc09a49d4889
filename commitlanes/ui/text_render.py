"""Plain-text rendering of graph rows, for terminals and debugging."""

from commitlanes.graph.stream import GraphNodeStream
from commitlanes.graph.types import GraphNode

COMMIT_GLYPH = "*"
PASSING_GLYPH = "|"
EMPTY_GLYPH = " "
UNCOMMITTED_LABEL = "Uncommitted changes"


def render_lanes(node: GraphNode, width: int) -> str:
    """
    Draw one row's lane column as text, two characters per lane.

    Lanes ending at the commit from above lean toward the commit from the top
    (``/`` on the right, ``\\`` on the left); lanes leaving it downward lean the
    other way. A lane doing both on one row points at the commit.
    """
    cells = [EMPTY_GLYPH] * max(width, node.width)
    for lane in node.passing_lanes:
        cells[lane] = PASSING_GLYPH
    for lane in node.forking_off_lanes:
        cells[lane] = "/" if lane > node.lane else "\\"
    for lane in node.merging_lanes:
        if lane in node.forking_off_lanes:
            cells[lane] = "<" if lane > node.lane else ">"
        else:
            cells[lane] = "\\" if lane > node.lane else "/"
    cells[node.lane] = COMMIT_GLYPH
    return " ".join(cells)


def render_row(node: GraphNode, width: int) -> str:
    """Lanes followed by short id, labels and summary."""
    parts = [render_lanes(node, width), node.commit.short_id]
    if node.commit.labels:
        parts.append("(" + ", ".join(node.commit.labels) + ")")
    if node.commit.summary:
        parts.append(node.commit.summary)
    return " ".join(parts)


def render_graph(nodes: GraphNodeStream, uncommitted_changes: bool = False) -> list[str]:
    """Render every row; optionally put an uncommitted-changes row on lane 0 first."""
    width = max(nodes.lane_count, 1)
    lines = []
    if uncommitted_changes:
        lanes = " ".join([COMMIT_GLYPH] + [EMPTY_GLYPH] * (width - 1))
        lines.append(f"{lanes} {UNCOMMITTED_LABEL}")
    lines.extend(render_row(node, width) for node in nodes)
    return lines
