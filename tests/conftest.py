"""Shared fixtures for commitlanes tests."""

import pygit2
import pytest
from PySide6.QtCore import QCoreApplication

from commitlanes.graph.types import CommitRecord


def commit(commit_id: str, *parents: str) -> CommitRecord:
    """Shorthand for a commit record with the given parents."""
    return CommitRecord(id=commit_id, parent_ids=tuple(parents))


@pytest.fixture
def fork_merge_commits() -> list[CommitRecord]:
    """
    A -- B -- C ------ F
          \\          /
           D ---- E

    Newest first: F merges C (first parent) and E.
    """
    return [
        commit("F", "C", "E"),
        commit("C", "B"),
        commit("E", "D"),
        commit("D", "B"),
        commit("B", "A"),
        commit("A"),
    ]


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


class RepoBuilder:
    """Creates empty-tree commits in a fresh repository."""

    def __init__(self, path: str) -> None:
        self.repo = pygit2.init_repository(path)
        self._tree = self.repo.TreeBuilder().write()
        self._clock = 1_700_000_000

    def commit(self, message: str, parents: list[pygit2.Oid], ref: str | None = None) -> pygit2.Oid:
        self._clock += 60
        sig = pygit2.Signature("Test", "test@example.com", self._clock, 0)
        return self.repo.create_commit(ref, sig, sig, message, self._tree, parents)


@pytest.fixture
def repo_builder(tmp_path) -> RepoBuilder:
    return RepoBuilder(str(tmp_path / "repo"))
