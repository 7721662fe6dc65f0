"""Persistence port for the user's last selected language.

The localization runtime needs exactly two operations from whatever stores
preferences on the host platform: read_int and write_int.
"""

import json
from pathlib import Path
from threading import Lock
from typing import Protocol, runtime_checkable

from kiosk_locale.core.logging_utils import setup_logger

logger = setup_logger(__name__)


@runtime_checkable
class LanguagePersistence(Protocol):
    """Integer key-value storage."""

    def read_int(self, key: str) -> int | None: ...

    def write_int(self, key: str, value: int) -> None: ...


class MemoryPreferences:
    """Process-local preferences; forgets everything on exit."""

    def __init__(self, initial: dict[str, int] | None = None):
        self._values: dict[str, int] = dict(initial or {})

    def read_int(self, key: str) -> int | None:
        return self._values.get(key)

    def write_int(self, key: str, value: int) -> None:
        self._values[key] = int(value)


class JsonFilePreferences:
    """Preferences stored as a flat JSON object on disk."""

    def __init__(self, path: str | Path):
        """Initialize file-backed preferences.

        Args:
            path: JSON file location; created on first write
        """
        self.path = Path(path)
        self._lock = Lock()
        self._values: dict[str, int] = self._load()

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading preferences from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Preferences file {self.path} does not hold an object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, int)}

    def read_int(self, key: str) -> int | None:
        with self._lock:
            return self._values.get(key)

    def write_int(self, key: str, value: int) -> None:
        with self._lock:
            self._values[key] = int(value)
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump(self._values, f, indent=2)
            except OSError as e:
                logger.error(f"Error saving preferences to {self.path}: {e}")
