"""Per-title skip offset persistence.

Offsets correct systematic timing drift of a provider for one title. They are
kept as a single ``{card_id: seconds}`` mapping serialised into the host's
key-value storage; a zero offset is never stored.
"""

import json
from typing import Dict, Optional

from skipsync.fs.storage import KeyValueStorage
from skipsync.models.core import CardId
from skipsync.utils.debug import debug

STORAGE_KEY = "skipsync_offsets"

# Values offered by the player's offset picker.
OFFSET_CHOICES: tuple[int, ...] = (
    -30, -20, -15, -10, -5, -3, -2, -1, 0, 1, 2, 3, 5, 10, 15, 20, 30
)


def format_offset(value: int) -> str:
    """Render an offset with an explicit sign, e.g. ``+5`` or ``-3``."""
    if value == 0:
        return "0"
    return f"+{value}" if value > 0 else str(value)


class OffsetStore:
    """Read and write per-title offsets through a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def all_offsets(self) -> Dict[str, int]:
        """Return the full offset mapping; corrupt data reads as empty."""
        raw = self.storage.get(self.key, "{}")
        try:
            data = json.loads(raw) if isinstance(raw, str) else raw
        except ValueError:
            debug(f"Discarding malformed offset data: {raw!r}")
            return {}
        if not isinstance(data, dict):
            return {}
        offsets: Dict[str, int] = {}
        for card_id, value in data.items():
            try:
                offsets[str(card_id)] = int(value)
            except (TypeError, ValueError):
                debug(f"Dropping malformed offset for {card_id}: {value!r}")
        return offsets

    def get_offset(self, card_id: Optional[CardId]) -> int:
        if not card_id:
            return 0
        return self.all_offsets().get(str(card_id), 0)

    def set_offset(self, card_id: Optional[CardId], value: int) -> None:
        """Store *value* for *card_id*; zero removes the record entirely."""
        if not card_id:
            return
        offsets = self.all_offsets()
        if value == 0:
            offsets.pop(str(card_id), None)
        else:
            offsets[str(card_id)] = int(value)
        self.storage.set(self.key, json.dumps(offsets))
