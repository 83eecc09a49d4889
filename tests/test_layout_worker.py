"""
Tests for the background layout worker and its controller.

Workers are run synchronously; the controller's thread start is patched out
so generation handling can be checked without an event loop.
"""

from unittest.mock import patch

import pytest
from conftest import commit

from commitlanes.graph.stream import GraphNodeStream, build_graph
from commitlanes.ui.layout_worker import GraphLayoutController, GraphLayoutWorker


@pytest.fixture
def collected(qapp):
    """Record worker signals as plain lists."""

    def attach(worker: GraphLayoutWorker) -> dict[str, list]:
        events: dict[str, list] = {"finished": [], "error": [], "done": []}
        worker.finished.connect(lambda generation, nodes: events["finished"].append((generation, nodes)))
        worker.error.connect(lambda generation, message: events["error"].append((generation, message)))
        worker.done.connect(lambda: events["done"].append(True))
        return events

    return attach


class TestGraphLayoutWorker:
    def test_publishes_complete_pass(self, collected, fork_merge_commits):
        worker = GraphLayoutWorker(fork_merge_commits, generation=3)
        events = collected(worker)

        worker.run()

        assert len(events["finished"]) == 1
        generation, nodes = events["finished"][0]
        assert generation == 3
        assert nodes == build_graph(fork_merge_commits)
        assert events["error"] == []
        assert events["done"] == [True]

    def test_cancelled_pass_publishes_nothing(self, collected, fork_merge_commits):
        worker = GraphLayoutWorker(fork_merge_commits)
        events = collected(worker)

        worker.cancel()
        worker.run()

        assert worker.is_cancelled()
        assert events["finished"] == []
        assert events["error"] == []
        assert events["done"] == [True]

    def test_malformed_input_reports_failure(self, collected):
        worker = GraphLayoutWorker([commit("a", "b"), commit("b", "a")], generation=2)
        events = collected(worker)

        worker.run()

        assert events["finished"] == []
        assert len(events["error"]) == 1
        generation, message = events["error"][0]
        assert generation == 2
        assert message.startswith("Graph computation failed")


class TestGraphLayoutController:
    def test_refresh_abandons_pass_in_flight(self, qapp, fork_merge_commits):
        controller = GraphLayoutController()
        with patch.object(GraphLayoutController, "_start_worker") as start:
            assert controller.refresh(fork_merge_commits) == 1
            assert controller.refresh(fork_merge_commits) == 2

        first, second = (call.args[0] for call in start.call_args_list)
        assert first.is_cancelled()
        assert not second.is_cancelled()
        assert second.generation == 2

    def test_stale_result_is_dropped(self, qapp, fork_merge_commits):
        controller = GraphLayoutController()
        published = []
        controller.graph_ready.connect(published.append)
        with patch.object(GraphLayoutController, "_start_worker"):
            controller.refresh(fork_merge_commits)
            controller.refresh(fork_merge_commits[1:])

        controller._on_finished(1, build_graph(fork_merge_commits))

        assert published == []
        assert len(controller.nodes) == 0

    def test_current_result_replaces_graph(self, qapp, fork_merge_commits):
        controller = GraphLayoutController()
        published = []
        controller.graph_ready.connect(published.append)
        with patch.object(GraphLayoutController, "_start_worker"):
            generation = controller.refresh(fork_merge_commits)

        result = build_graph(fork_merge_commits)
        controller._on_finished(generation, result)

        assert controller.nodes is result
        assert published == [result]

    def test_failure_falls_back_to_flat_list(self, qapp, fork_merge_commits):
        controller = GraphLayoutController()
        failures = []
        controller.graph_failed.connect(failures.append)
        with patch.object(GraphLayoutController, "_start_worker"):
            generation = controller.refresh(fork_merge_commits)

        controller._on_error(generation, "Graph computation failed: boom")

        assert failures == ["Graph computation failed: boom"]
        assert controller.nodes == GraphNodeStream.flat(fork_merge_commits)
        assert controller.nodes.is_flat

    def test_cancel_keeps_published_graph(self, qapp, fork_merge_commits):
        controller = GraphLayoutController()
        with patch.object(GraphLayoutController, "_start_worker"):
            generation = controller.refresh(fork_merge_commits)
        result = build_graph(fork_merge_commits)
        controller._on_finished(generation, result)

        with patch.object(GraphLayoutController, "_start_worker"):
            controller.refresh(fork_merge_commits[1:])
        controller.cancel()

        assert controller.nodes is result
