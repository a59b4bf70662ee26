"""Storage backends and file helpers for skipsync."""

from skipsync.fs.storage import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    load_request,
)

__all__ = ["JsonFileStorage", "KeyValueStorage", "MemoryStorage", "load_request"]
