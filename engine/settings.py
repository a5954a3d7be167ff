"""Loading and saving of user settings read by the execution engine.

The settings are stored as a list of dictionaries to preserve order.
Each dictionary contains ``key``, ``value`` and ``type`` entries.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
from typing import Any, List, Dict

from engine import DEFAULT_EXERCISE_DURATION, DEFAULT_REST_DURATION

logger = logging.getLogger(__name__)

# Path to the JSON file where settings are persisted.
SETTINGS_PATH = Path(__file__).resolve().parents[1] / "data" / "settings.json"

# Default settings to initialize the file on first run.
DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {"key": "use_kg", "value": False, "type": "bool"},
    {"key": "rest_timer_default_seconds", "value": DEFAULT_REST_DURATION, "type": "int"},
    {
        "key": "exercise_timer_default_seconds",
        "value": DEFAULT_EXERCISE_DURATION,
        "type": "int",
    },
]


class Settings:
    """Unit flag and timer defaults backed by a JSON file."""

    def __init__(self, path: Path = SETTINGS_PATH) -> None:
        self.path = Path(path)
        # Read from disk only once
        self._cache: List[Dict[str, Any]] | None = None

    def load(self) -> List[Dict[str, Any]]:
        """Load settings from :attr:`path` or create defaults."""
        if self.path.exists():
            try:
                with self.path.open("r", encoding="utf-8") as fh:
                    data = json.load(fh)
                    if isinstance(data, list):
                        return data
            except (OSError, ValueError):
                logger.exception("Unreadable settings file %s, using defaults", self.path)
        defaults = [dict(item) for item in DEFAULT_SETTINGS]
        self.save(defaults)
        return defaults

    def save(self, settings: List[Dict[str, Any]]) -> None:
        """Persist ``settings`` to :attr:`path`."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(settings, fh)
        self._cache = settings

    def all(self) -> List[Dict[str, Any]]:
        if self._cache is None:
            self._cache = self.load()
        return self._cache

    def get_value(self, key: str, default: Any = None) -> Any:
        """Fetch the value associated with ``key``."""
        for item in self.all():
            if item.get("key") == key:
                return item.get("value")
        for item in DEFAULT_SETTINGS:
            if item["key"] == key:
                return item["value"]
        return default

    def set_value(self, key: str, value: Any) -> None:
        """Update ``key`` with ``value`` and persist the change."""
        settings = self.all()
        for item in settings:
            if item.get("key") == key:
                item["value"] = value
                break
        else:
            settings.append({"key": key, "value": value, "type": type(value).__name__})
        self.save(settings)

    @property
    def use_kg(self) -> bool:
        return bool(self.get_value("use_kg", False))

    @property
    def rest_duration(self) -> int:
        return int(self.get_value("rest_timer_default_seconds", DEFAULT_REST_DURATION))

    @property
    def exercise_duration(self) -> int:
        return int(
            self.get_value("exercise_timer_default_seconds", DEFAULT_EXERCISE_DURATION)
        )
