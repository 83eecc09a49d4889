"""Commit graph lane layout."""

from commitlanes.graph.builder import GraphBuilder
from commitlanes.graph.classifier import RowLanes, classify_row
from commitlanes.graph.errors import (
    DuplicateParentReference,
    GraphError,
    InvalidLaneRelease,
    MalformedInput,
    MissingParent,
)
from commitlanes.graph.lane_pool import LanePool
from commitlanes.graph.stream import GraphNodeStream, build_graph
from commitlanes.graph.types import CommitRecord, GraphNode, get_lane_color, lane_color_index

__all__ = [
    "CommitRecord",
    "DuplicateParentReference",
    "GraphBuilder",
    "GraphError",
    "GraphNode",
    "GraphNodeStream",
    "InvalidLaneRelease",
    "LanePool",
    "MalformedInput",
    "MissingParent",
    "RowLanes",
    "build_graph",
    "classify_row",
    "get_lane_color",
    "lane_color_index",
]
