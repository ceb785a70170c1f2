"""
Persistent key-value settings stored in a JSON file.

The store is opaque: it maps string keys to JSON values and
knows nothing about rates or sessions. Writes replace the file atomically
(temp file + rename) so an interrupted write never leaves a corrupted file.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class SettingsStoreError(Exception):
    """Raised when the settings file cannot be read or written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(message)


class SettingsStore:
    """
    JSON file backed key-value store.

    A missing file reads as an empty store; it is created on the first
    write. Values are cached in memory after the first read.

    Example:
        >>> store = SettingsStore("/tmp/werkuren-example.json")
        >>> store.set("vih_rate_hour", "45")
        >>> store.get("vih_rate_hour")
        '45'
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.

        Args:
            path: Location of the JSON settings file
        """
        self.path = Path(path).expanduser()
        self._values: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and persist the file."""
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Store several keys with a single write."""
        with self._lock:
            updated = dict(self._load())
            updated.update(values)
            self._save(updated)
            self._values = updated
        logger.debug(f"Stored settings keys {sorted(values)} in {self.path}")

    def delete(self, *keys: str) -> None:
        """Remove keys; keys that are not present are ignored."""
        with self._lock:
            current = self._load()
            if not any(key in current for key in keys):
                return
            updated = {k: v for k, v in current.items() if k not in keys}
            self._save(updated)
            self._values = updated
        logger.debug(f"Removed settings keys {sorted(keys)} from {self.path}")

    def as_dict(self) -> Dict[str, Any]:
        """Return a copy of every stored key and value."""
        with self._lock:
            return dict(self._load())

    def _load(self) -> Dict[str, Any]:
        """
        Read the settings file into the in-memory cache.

        Raises:
            SettingsStoreError: If the file is unreadable or not a JSON object
        """
        if self._values is not None:
            return self._values

        if not self.path.exists():
            logger.debug(f"Settings file not found, starting empty: {self.path}")
            self._values = {}
            return self._values

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsStoreError(
                f"Settings file {self.path} is not valid JSON: {e}", self.path
            ) from e
        except OSError as e:
            raise SettingsStoreError(
                f"Cannot read settings file {self.path}: {e}", self.path
            ) from e

        if not isinstance(data, dict):
            raise SettingsStoreError(
                f"Settings file {self.path} must contain a JSON object", self.path
            )

        logger.debug(f"Loaded {len(data)} settings from {self.path}")
        self._values = data
        return self._values

    def _save(self, values: Dict[str, Any]) -> None:
        """
        Write all values using an atomic replace.

        Raises:
            SettingsStoreError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, suffix=".tmp"
            )
        except OSError as e:
            raise SettingsStoreError(
                f"Cannot write settings file {self.path}: {e}", self.path
            ) from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2, sort_keys=True)
            os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise SettingsStoreError(
                f"Cannot write settings file {self.path}: {e}", self.path
            ) from e
