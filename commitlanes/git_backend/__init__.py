"""Git backend supplying commit history to the graph"""

from commitlanes.git_backend.repository import GraphRepository

__all__ = ["GraphRepository"]
