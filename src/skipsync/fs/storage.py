"""Key-value persistence and request loading for skipsync.

This module provides the key-value storage collaborator the offset store
persists through, plus helpers for reading playback requests from disk.
- KeyValueStorage mirrors the host player's storage API: ``get(key, default)``
  and ``set(key, value)`` where values are serialised strings.
- JsonFileStorage keeps every key in one JSON file so the CLI can share
  offsets across sessions; MemoryStorage serves embedding hosts and tests.
- load_request accepts JSON or YAML playback requests (YAML is convenient for
  hand-written fixtures).

Design:
- Reads never raise on a missing or corrupt file; the storage behaves as if it
  were empty and the next write replaces the file.
- Writes go through a temporary file and ``os.replace`` so a crash never leaves
  a half-written storage file behind.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict

import yaml

from skipsync.models.core import PlaybackRequest

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class KeyValueStorage(ABC):
    """Abstract key-value store shared with the host player."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for *key*, or *default* when absent."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store the serialised *value* under *key*."""
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """Process-local storage backed by a plain dict."""

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self.data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStorage(KeyValueStorage):
    """Storage persisted as a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        """Initialize storage at *path* (created lazily on first write)."""
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)


def load_request(path: Path) -> PlaybackRequest:
    """Load a playback request from a JSON or YAML file.

    Args:
        path: File holding the host's playback parameters.

    Returns:
        The parsed PlaybackRequest.

    Raises:
        ValueError: If the file does not contain a mapping or fails validation.
        OSError: If the file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    if Path(path).suffix.lower() in YAML_SUFFIXES:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Playback request must be a mapping: {path}")
    return PlaybackRequest.model_validate(data)
