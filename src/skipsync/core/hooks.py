"""Playback integration: pre-play hooks around the host player.

The host player is wrapped rather than patched. A PlaybackGateway sits in
front of a PlayerHost; hosts call ``gateway.play`` instead of starting
playback themselves, and skipsync registers its resolver as a pre-play hook
through ``register_pre_play``, the single documented extension point.

Guarantees:
- Hooks run sequentially, in registration order, before playback starts.
- A failing hook is logged and skipped; it never prevents playback.
- ``PlayerHost.play`` runs exactly once per ``gateway.play`` call.
- Registering the same hook twice is a no-op, so repeated start-up code cannot
  install the resolver twice.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Awaitable, Callable, List, Optional

from skipsync.models.core import PlaybackRequest, PlaylistItem
from skipsync.utils.debug import error, info

if TYPE_CHECKING:
    from skipsync.core.resolver import SkipResolver

PrePlayHook = Callable[[PlaybackRequest], Awaitable[object]]


class PlayerHost(ABC):
    """The host player's playback entry points."""

    @abstractmethod
    def play(self, request: PlaybackRequest) -> None:
        """Start playback of *request*."""
        raise NotImplementedError

    @abstractmethod
    def playlist(self, items: List[PlaylistItem]) -> None:
        """Replace the host's active playlist."""
        raise NotImplementedError


class Notifier(ABC):
    """Fire-and-forget user notifications."""

    @abstractmethod
    def show(self, message: str) -> None:
        raise NotImplementedError


class LogNotifier(Notifier):
    """Notifier that writes messages to the skipsync log."""

    def show(self, message: str) -> None:
        info(message)


class PlaybackGateway:
    """Runs pre-play hooks, then hands the request to the host player."""

    def __init__(self, host: PlayerHost) -> None:
        self.host = host
        self._hooks: List[PrePlayHook] = []
        self._pending_playlist: Optional[List[PlaylistItem]] = None

    @property
    def hooks(self) -> List[PrePlayHook]:
        return list(self._hooks)

    def register_pre_play(self, hook: PrePlayHook) -> bool:
        """Register *hook* to run before every playback start.

        Returns:
            False if the hook was already registered, True otherwise.
        """
        if hook in self._hooks:
            return False
        self._hooks.append(hook)
        return True

    def playlist(self, items: List[PlaylistItem]) -> None:
        """Forward a playlist to the host, re-applying it after the next play."""
        self._pending_playlist = items
        self.host.playlist(items)

    async def play(self, request: PlaybackRequest) -> None:
        """Run every pre-play hook, then start playback exactly once."""
        for hook in self._hooks:
            try:
                await hook(request)
            except Exception as exc:  # noqa: BLE001
                error(f"Pre-play hook {hook!r} failed: {exc}")
        self.host.play(request)
        if self._pending_playlist is not None:
            pending, self._pending_playlist = self._pending_playlist, None
            self.host.playlist(pending)


def install(gateway: PlaybackGateway, resolver: "SkipResolver") -> bool:
    """Wire *resolver* into *gateway* as a pre-play hook (idempotent)."""
    return gateway.register_pre_play(resolver.resolve)
