"""
Background layout of the commit graph.

A repository refresh starts a new pass on its own thread. Starting another
refresh abandons the one in flight: its rows are dropped and only a pass that
runs to completion replaces the published graph.
"""

import logging
import threading
from collections.abc import Iterable

from PySide6.QtCore import QObject, QThread, Signal, Slot

from commitlanes.constants import PALETTE_SIZE
from commitlanes.graph.builder import GraphBuilder
from commitlanes.graph.stream import GraphNodeStream
from commitlanes.graph.types import CommitRecord, GraphNode

logger = logging.getLogger(__name__)


class GraphLayoutWorker(QObject):
    """Worker that runs one layout pass in a separate thread"""

    finished = Signal(int, object)  # Emitted with (generation, GraphNodeStream)
    error = Signal(int, str)  # Emitted with (generation, message) when the pass fails
    done = Signal()  # Emitted when run() returns, whatever the outcome

    def __init__(
        self,
        commits: Iterable[CommitRecord],
        generation: int = 0,
        palette_size: int = PALETTE_SIZE,
    ) -> None:
        super().__init__()
        self.commits = list(commits)
        self.generation = generation
        self.palette_size = palette_size
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """Ask the pass to stop at the next row. Safe to call from any thread."""
        self._cancel_event.set()

    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(self) -> None:
        """Lay out the commits and publish the result unless cancelled"""
        try:
            builder = GraphBuilder(
                palette_size=self.palette_size,
                known_ids={commit.id for commit in self.commits},
            )
            nodes: list[GraphNode] = []
            for node in builder.process(self.commits):
                if self.is_cancelled():
                    logger.debug("Layout pass %d abandoned at row %d", self.generation, node.row)
                    return
                nodes.append(node)

            if self.is_cancelled():
                return
            self.finished.emit(self.generation, GraphNodeStream(nodes, builder.recovered_errors))
        except Exception as e:
            logger.exception("Layout pass %d failed", self.generation)
            self.error.emit(self.generation, f"Graph computation failed: {e}")
        finally:
            self.done.emit()


class GraphLayoutController(QObject):
    """Owns the published graph and the pass that will replace it."""

    graph_ready = Signal(object)  # GraphNodeStream, published atomically
    graph_failed = Signal(str)  # Emitted before the flat fallback is published

    def __init__(self, palette_size: int = PALETTE_SIZE, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.palette_size = palette_size
        self.nodes = GraphNodeStream()
        self._generation = 0
        self._commits: list[CommitRecord] = []
        self._worker: GraphLayoutWorker | None = None
        # generation -> (thread, worker), kept alive until the thread finishes
        self._running: dict[int, tuple[QThread, GraphLayoutWorker]] = {}

    @property
    def generation(self) -> int:
        return self._generation

    def refresh(self, commits: Iterable[CommitRecord]) -> int:
        """Start a pass over ``commits``, abandoning any pass still running.

        Returns:
            The generation number of the new pass
        """
        self.cancel()
        self._generation += 1
        self._commits = list(commits)

        worker = GraphLayoutWorker(self._commits, self._generation, self.palette_size)
        worker.finished.connect(self._on_finished)
        worker.error.connect(self._on_error)
        self._worker = worker
        self._start_worker(worker)
        return self._generation

    def cancel(self) -> None:
        """Abandon the pass in flight, if any. The published graph is kept."""
        if self._worker is not None:
            self._worker.cancel()
            self._worker = None

    def _start_worker(self, worker: GraphLayoutWorker) -> None:
        """Run the worker on a fresh thread."""
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.done.connect(thread.quit)
        thread.finished.connect(self._reap_threads)
        self._running[worker.generation] = (thread, worker)
        thread.start()

    @Slot()
    def _reap_threads(self) -> None:
        """Drop threads that have exited."""
        for generation, (thread, worker) in list(self._running.items()):
            if thread.isFinished():
                del self._running[generation]
                worker.deleteLater()
                thread.deleteLater()

    def shutdown(self) -> None:
        """Cancel everything and wait for worker threads to exit."""
        self.cancel()
        for thread, _worker in list(self._running.values()):
            thread.quit()
            thread.wait()

    @Slot(int, object)
    def _on_finished(self, generation: int, nodes: GraphNodeStream) -> None:
        if generation != self._generation:
            logger.debug("Dropping result of stale layout pass %d", generation)
            return
        self._worker = None
        self.nodes = nodes
        self.graph_ready.emit(nodes)

    @Slot(int, str)
    def _on_error(self, generation: int, message: str) -> None:
        if generation != self._generation:
            return
        self._worker = None
        logger.error("%s; showing commits without lanes", message)
        self.graph_failed.emit(message)
        self.nodes = GraphNodeStream.flat(self._commits)
        self.graph_ready.emit(self.nodes)
