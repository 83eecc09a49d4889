"""Graph presentation: background layout and text rendering."""

from commitlanes.ui.layout_worker import GraphLayoutController, GraphLayoutWorker
from commitlanes.ui.text_render import render_graph, render_row

__all__ = ["GraphLayoutController", "GraphLayoutWorker", "render_graph", "render_row"]
