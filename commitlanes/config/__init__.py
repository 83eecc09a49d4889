"""Configuration for commitlanes"""

from commitlanes.config.settings import Settings

__all__ = ["Settings"]
