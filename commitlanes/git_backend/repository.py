"""
Git repository access using pygit2
"""

import itertools
import logging
from collections.abc import Iterator
from pathlib import Path

import pygit2

from commitlanes.graph.types import CommitRecord

logger = logging.getLogger(__name__)

TAG_PREFIX = "refs/tags/"


class GraphRepository:
    """Reads commit history out of a repository for the graph"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        try:
            self.repo = pygit2.Repository(repo_path)
        except (pygit2.GitError, KeyError) as e:
            raise ValueError(f"Not a git repository: {repo_path}") from e

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def get_labels(self) -> dict[str, list[str]]:
        """Get mapping of commit OID -> branch and tag names pointing at it."""
        labels: dict[str, list[str]] = {}

        for branch_name in self.repo.branches:
            branch = self.repo.branches[branch_name]
            commit = branch.peel(pygit2.Commit)
            labels.setdefault(str(commit.id), []).append(branch_name)

        for ref_name in self.repo.references:
            if not ref_name.startswith(TAG_PREFIX):
                continue
            try:
                commit = self.repo.references[ref_name].peel(pygit2.Commit)
            except (pygit2.GitError, ValueError):
                # Tags of trees or blobs have no place in the graph
                continue
            labels.setdefault(str(commit.id), []).append(ref_name[len(TAG_PREFIX) :])

        return labels

    def _tip_oids(self, all_branches: bool) -> list[pygit2.Oid]:
        """HEAD first, then every branch tip when requested."""
        tips: list[pygit2.Oid] = []
        if not self.repo.head_is_unborn:
            tips.append(self.repo.head.peel(pygit2.Commit).id)
        if all_branches:
            for branch_name in sorted(self.repo.branches):
                oid = self.repo.branches[branch_name].peel(pygit2.Commit).id
                if oid not in tips:
                    tips.append(oid)
        return tips

    def iter_commits(
        self, all_branches: bool = True, max_count: int | None = None
    ) -> Iterator[CommitRecord]:
        """
        Walk history child-before-parent.

        Args:
            all_branches: Include every local and remote branch, not just HEAD
            max_count: Stop after this many commits (None for no limit)

        Yields:
            CommitRecord per commit, in topological order with newer commits first
        """
        tips = self._tip_oids(all_branches)
        if not tips:
            return

        labels = self.get_labels()
        walker = self.repo.walk(
            tips[0], pygit2.enums.SortMode.TOPOLOGICAL | pygit2.enums.SortMode.TIME
        )
        for oid in tips[1:]:
            walker.push(oid)

        for c in itertools.islice(walker, max_count):
            oid = str(c.id)
            yield CommitRecord(
                id=oid,
                parent_ids=tuple(str(parent_id) for parent_id in c.parent_ids),
                timestamp=c.commit_time,
                labels=tuple(labels.get(oid, [])),
                summary=c.message.strip().split("\n")[0][:80],
            )

    def load_commits(
        self, all_branches: bool = True, max_count: int | None = None
    ) -> list[CommitRecord]:
        """Materialize a walk for a layout pass."""
        commits = list(self.iter_commits(all_branches=all_branches, max_count=max_count))
        logger.debug("Loaded %d commits from %s", len(commits), self.repo.path)
        return commits

    def has_uncommitted_changes(self) -> bool:
        """Check whether the work tree or index differ from HEAD."""
        if self.repo.is_bare:
            return False
        status = self.repo.status()
        return any(flags != pygit2.enums.FileStatus.IGNORED for flags in status.values())
