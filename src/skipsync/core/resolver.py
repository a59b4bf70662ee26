"""Skip-segment resolution pipeline.

Turns a playback request into skip segments written onto the request (and its
playlist) before playback starts:

1. Ignore trailers and requests that already carry segments.
2. Work out the season/episode being played.
3. Anime: resolve the MyAnimeList id and ask the AniSkip timing service.
4. Otherwise, or if AniSkip had nothing: look the title up in the community
   skip database, backfilling sibling playlist entries from the same document.
5. Apply the per-title offset, write the segments and notify the user.

Every provider failure collapses to "nothing found"; resolution never raises
for bad or missing external data and never leaves a request half-updated.
"""

from typing import Any, Callable, Dict, List, Optional

from skipsync.core.anime import classify_is_anime, search_external_id
from skipsync.core.hooks import LogNotifier, Notifier
from skipsync.core.offsets import OffsetStore
from skipsync.core.playlist import detect_position, propagate
from skipsync.core.segments import apply_offset, parse_provider_segments
from skipsync.metadata.clients.aniskip import AniSkipClient
from skipsync.metadata.clients.jikan import JikanClient
from skipsync.metadata.clients.skipdb import SkipDbClient
from skipsync.metadata.settings import Settings
from skipsync.models.core import (
    ContentCard,
    PlaybackPosition,
    PlaybackRequest,
    Provenance,
    Resolution,
    SkipSegment,
)
from skipsync.utils.debug import debug

TRAILER_KEYWORDS: tuple[str, ...] = ("трейлер", "trailer", "тизер", "teaser")


def is_trailer(title: Optional[str]) -> bool:
    """True when *title* looks like a trailer or teaser in any known language."""
    lowered = (title or "").lower()
    return any(keyword in lowered for keyword in TRAILER_KEYWORDS)


def loaded_message(position: PlaybackPosition) -> str:
    return (
        f"Skip segments loaded: season {position.season}, "
        f"episode {position.episode}"
    )


class SkipResolver:
    """Resolve skip segments for playback requests.

    Collaborators are injected so hosts and tests can swap transports,
    storage and notification channels; defaults are built from Settings.
    """

    def __init__(
        self,
        offsets: OffsetStore,
        *,
        settings: Optional[Settings] = None,
        jikan: Optional[JikanClient] = None,
        aniskip: Optional[AniSkipClient] = None,
        skipdb: Optional[SkipDbClient] = None,
        notifier: Optional[Notifier] = None,
        active_card: Optional[Callable[[], Optional[ContentCard]]] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            offsets: Store holding per-title offsets.
            settings: Provider settings shared by the default clients.
            jikan: Title-index client used for anime id resolution.
            aniskip: Anime timing-service client.
            skipdb: Community skip database client.
            notifier: Receives the user-visible success message.
            active_card: Fallback supplying the card of the host's active
                screen when the request does not carry one.
        """
        self.settings = settings or Settings()
        self.offsets = offsets
        self.jikan = jikan or JikanClient(self.settings)
        self.aniskip = aniskip or AniSkipClient(self.settings)
        self.skipdb = skipdb or SkipDbClient(self.settings)
        self.notifier = notifier or LogNotifier()
        self.active_card = active_card

    def _card_for(self, request: PlaybackRequest) -> Optional[ContentCard]:
        if request.card is not None:
            return request.card
        if self.active_card is not None:
            return self.active_card()
        return None

    async def resolve(self, request: PlaybackRequest) -> Optional[Resolution]:
        """Resolve and apply skip segments for *request*, mutating it in place.

        Returns:
            The Resolution when segments were found, otherwise None.
        """
        card = self._card_for(request)
        if card is None:
            return None

        title = request.title or card.display_title
        if is_trailer(title):
            debug(f"Skipping trailer {title!r}")
            return None
        if request.has_segments:
            return None

        position = detect_position(request)
        if not card.is_serial:
            position = PlaybackPosition(season=1, episode=1)

        segments: List[SkipSegment] = []
        provenance: Optional[Provenance] = None

        if classify_is_anime(card):
            segments = await self._resolve_anime(card, position)
            if segments:
                provenance = Provenance.TIMING_SERVICE

        if not segments and card.local_id:
            segments = await self._resolve_community(card, position, request)
            if segments:
                provenance = Provenance.COMMUNITY_DB

        if not segments or provenance is None:
            debug(f"No skip segments for {title!r} {position}")
            return None

        offset = self.offsets.get_offset(card.card_id)
        segments = apply_offset(segments, offset) or []
        request.segments = list(segments)
        propagate(request.playlist, position.season, position.episode, segments)

        debug(
            f"Loaded {len(segments)} skip segment(s) for {title!r} "
            f"S{position.season}E{position.episode} from {provenance.value}"
        )
        self.notifier.show(loaded_message(position))
        return Resolution(segments=segments, provenance=provenance, position=position)

    async def _resolve_anime(
        self, card: ContentCard, position: PlaybackPosition
    ) -> List[SkipSegment]:
        if not card.search_name:
            return []
        mal_id = await search_external_id(
            self.jikan, card.search_name, position.season, card.release_year
        )
        if mal_id is None:
            return []
        raw = await self.aniskip.fetch(mal_id, position.episode)
        return parse_provider_segments(raw)

    async def _resolve_community(
        self,
        card: ContentCard,
        position: PlaybackPosition,
        request: PlaybackRequest,
    ) -> List[SkipSegment]:
        local_id = card.local_id
        if not local_id:
            return []
        document = await self.skipdb.fetch(local_id)
        if document is None:
            return []

        segments = self.skipdb.lookup(
            document, position.season, position.episode, serial=card.is_serial
        )
        self._backfill_playlist(card, position, request, document)
        return list(segments or [])

    def _backfill_playlist(
        self,
        card: ContentCard,
        position: PlaybackPosition,
        request: PlaybackRequest,
        document: Dict[str, Any],
    ) -> None:
        """Fill playlist entries with explicit positions from *document*."""
        offset = self.offsets.get_offset(card.card_id)
        for item in request.playlist:
            if item.has_segments or not item.episode:
                continue
            season = item.season or position.season
            found = self.skipdb.lookup(
                document, season, item.episode, serial=card.is_serial
            )
            if found:
                item.segments = list(apply_offset(found, offset) or [])
