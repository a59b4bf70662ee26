"""Shared fixtures for the skipsync test suite.

Provides in-memory collaborators (storage, notifier, player host) and a
resolver wired to fixed test endpoints so no test depends on the environment.
"""

from typing import List

import pytest

from skipsync.core.hooks import Notifier, PlayerHost
from skipsync.core.offsets import OffsetStore
from skipsync.core.resolver import SkipResolver
from skipsync.fs.storage import MemoryStorage
from skipsync.metadata.settings import Settings
from skipsync.models.core import PlaybackRequest, PlaylistItem

ANISKIP_URL = "https://aniskip.test/v2/skip-times"
JIKAN_URL = "https://jikan.test/v4/anime"
SKIP_DB_URL = "https://skipdb.test/database"


class RecordingNotifier(Notifier):
    """Notifier that remembers every message."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def show(self, message: str) -> None:
        self.messages.append(message)


class FakePlayer(PlayerHost):
    """Player host recording the calls it receives."""

    def __init__(self) -> None:
        self.played: List[PlaybackRequest] = []
        self.playlists: List[List[PlaylistItem]] = []
        self.events: List[str] = []

    def play(self, request: PlaybackRequest) -> None:
        self.played.append(request)
        self.events.append("play")

    def playlist(self, items: List[PlaylistItem]) -> None:
        self.playlists.append(items)
        self.events.append("playlist")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ANISKIP_API_URL=ANISKIP_URL,
        JIKAN_API_URL=JIKAN_URL,
        SKIP_DB_URL=SKIP_DB_URL,
        REQUEST_TIMEOUT=2.0,
        LENIENT_MOVIE_FALLBACK=False,
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def offsets(storage: MemoryStorage) -> OffsetStore:
    return OffsetStore(storage)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def resolver(
    offsets: OffsetStore, settings: Settings, notifier: RecordingNotifier
) -> SkipResolver:
    return SkipResolver(offsets, settings=settings, notifier=notifier)


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()
