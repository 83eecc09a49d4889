#!/usr/bin/env python3
"""
commitlanes - print a repository's history as a lane graph
"""

import argparse
import logging
import sys

from commitlanes.config.settings import Settings
from commitlanes.git_backend.repository import GraphRepository
from commitlanes.graph.errors import GraphError
from commitlanes.graph.stream import GraphNodeStream, build_graph
from commitlanes.ui.text_render import render_graph

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="commitlanes",
        description="Print the commit graph of a git repository",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Repository path (default: the repository containing the current directory)",
    )
    parser.add_argument(
        "-n",
        "--max-count",
        type=int,
        default=None,
        help="Limit the number of commits shown",
    )
    parser.add_argument(
        "--current-branch",
        action="store_true",
        help="Only walk history reachable from HEAD",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings()

    logging.basicConfig(
        level=settings.get_log_level(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s",
    )

    try:
        repo = GraphRepository(args.path)
    except ValueError as e:
        print(f"commitlanes: {e}", file=sys.stderr)
        return 1

    max_count = args.max_count if args.max_count is not None else settings.get_max_commits()
    all_branches = settings.get_all_branches() and not args.current_branch
    commits = repo.load_commits(all_branches=all_branches, max_count=max_count)

    try:
        nodes = build_graph(commits, palette_size=settings.get_palette_size())
    except GraphError:
        logger.exception("Graph computation failed")
        nodes = GraphNodeStream.flat(commits)

    for line in render_graph(nodes, uncommitted_changes=repo.has_uncommitted_changes()):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
