"""Errors raised or recorded while computing a commit graph."""


class GraphError(Exception):
    """Base class for graph computation faults."""


class InvalidLaneRelease(GraphError):
    """A lane position was released while not in use.

    This is an internal consistency fault in the builder and aborts the pass.
    """

    def __init__(self, position: int) -> None:
        super().__init__(f"Lane {position} is not active")
        self.position = position


class MalformedInput(GraphError):
    """The commit sequence cannot be a child-before-parent walk of a DAG."""

    def __init__(self, message: str, commit_id: str) -> None:
        super().__init__(message)
        self.commit_id = commit_id


class MissingParent(GraphError):
    """A listed parent never appears in the commit sequence (shallow or grafted history)."""

    def __init__(self, commit_id: str, parent_id: str) -> None:
        super().__init__(f"Parent {parent_id[:7]} of {commit_id[:7]} is not in the input")
        self.commit_id = commit_id
        self.parent_id = parent_id


class DuplicateParentReference(GraphError):
    """A commit lists the same parent more than once."""

    def __init__(self, commit_id: str, parent_id: str) -> None:
        super().__init__(f"{commit_id[:7]} lists parent {parent_id[:7]} more than once")
        self.commit_id = commit_id
        self.parent_id = parent_id
