"""
Settings management for commitlanes
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from commitlanes.constants import DEFAULT_MAX_COMMITS, PALETTE_SIZE, SETTINGS_RELATIVE_PATH


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS = {
        "graph": {
            "palette_size": PALETTE_SIZE,  # Lane colors cycle with this period
            "max_commits": DEFAULT_MAX_COMMITS,  # Commits loaded per refresh
            "all_branches": True,  # Walk every branch, not just HEAD
        },
        "logging": {"level": "WARNING"},
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / SETTINGS_RELATIVE_PATH

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.palette_size')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_palette_size(self) -> int:
        """Get the number of lane colors; non-positive values fall back to the default."""
        size = int(self.get("graph.palette_size", PALETTE_SIZE))
        return size if size > 0 else PALETTE_SIZE

    def get_max_commits(self) -> int | None:
        """Get the commit limit for a refresh. Zero or null means no limit."""
        value = self.get("graph.max_commits", DEFAULT_MAX_COMMITS)
        if not value:
            return None
        return int(value)

    def get_all_branches(self) -> bool:
        return bool(self.get("graph.all_branches", True))

    def get_log_level(self) -> int:
        """Get the log level, with DEBUG=1 in the environment taking precedence."""
        if os.environ.get("DEBUG") == "1":
            return logging.DEBUG
        name = str(self.get("logging.level", "WARNING")).upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.WARNING
