"""
Settings management for Kahva
"""

import copy
import json
from pathlib import Path
from typing import Any

from kahva.constants import COLORS_SETTING, DEBUG_LABELS_SETTING, ELIDED_NODES_SETTING, LOG_LIMIT_SETTING
from kahva.formatter.style import Rule, rules_from_config


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS = {
        "ui": {
            "log-synthetic-elided-nodes": False,  # Placeholder rows for skipped history
            "debug-labels": False,  # Annotate output with label paths
        },
        "log": {"limit": 200},  # Max commits shown
        "colors": {
            "commit_id": {"fg": "blue", "bold": True},
            "author": "yellow",
            "timestamp": "cyan",
            "bookmarks": "magenta",
            "description placeholder": {"fg": "yellow", "italic": True},
            "elided": "bright black",
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / ".config" / "kahva" / "settings.json"

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
        """Get a setting by dot-separated path (e.g., 'ui.debug-labels')"""
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

    def get_elide_indirect(self) -> bool:
        """Whether skipped history is shown as synthetic "(elided revisions)" rows."""
        return bool(self.get(ELIDED_NODES_SETTING, False))

    def get_debug_labels(self) -> bool:
        return bool(self.get(DEBUG_LABELS_SETTING, False))

    def get_log_limit(self) -> int:
        """Get the maximum number of commits to show in the log.

        Raises ValueError if the limit is not an integer.
        """
        limit = self.get(LOG_LIMIT_SETTING, 200)
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValueError(f"log.limit must be an integer, got {limit!r}")
        return max(1, limit)  # At least 1

    def get_style_rules(self) -> list[Rule]:
        """Get the style rule table built from the colors section.

        Raises ValueError if a color or style attribute is invalid.
        """
        colors = self.get(COLORS_SETTING, {})
        if not isinstance(colors, dict):
            raise ValueError("colors must be a table of label patterns to styles")
        return rules_from_config(colors)
