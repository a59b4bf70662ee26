"""Community skip database client.

The database is a static collection of JSON documents, one per local catalog
id, keyed by season then episode (as strings) or by ``movie``::

    {"1": {"1": [{"start": 90, "end": 180, "name": "Opening"}]}}
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from skipsync.core.segments import parse_database_segments
from skipsync.metadata.base import ProviderClient
from skipsync.models.core import CardId, SkipSegment

logger = logging.getLogger(__name__)

MOVIE_KEY = "movie"


def lookup_segments(
    document: Optional[Dict[str, Any]],
    season: int | str,
    episode: int | str,
    *,
    movie_fallback: bool = False,
) -> Optional[List[SkipSegment]]:
    """Find the segments for *season*/*episode* in a database document.

    Lookup order: exact season/episode, then the ``movie`` entry when asking
    for 1/1, then the ``movie`` entry for anything else if *movie_fallback*.

    Returns:
        The parsed segments, or None when the document has no matching entry.
    """
    if not isinstance(document, dict):
        return None
    season_key, episode_key = str(season), str(episode)

    episodes = document.get(season_key)
    if isinstance(episodes, dict) and isinstance(episodes.get(episode_key), list):
        return parse_database_segments(episodes[episode_key])

    movie = document.get(MOVIE_KEY)
    if not isinstance(movie, list):
        return None
    if season_key == "1" and episode_key == "1":
        return parse_database_segments(movie)
    if movie_fallback:
        return parse_database_segments(movie)
    return None


class SkipDbClient(ProviderClient):
    """Client fetching per-title documents from the community skip database."""

    provider = "skipdb"

    @property
    def base_url(self) -> str:
        return self.settings.SKIP_DB_URL.rstrip("/")

    async def fetch(self, local_id: CardId) -> Optional[Dict[str, Any]]:
        """Download the document for *local_id*; None when missing or invalid."""
        url = f"{self.base_url}/{local_id}.json"
        try:
            resp = await self._get(url)
            if not resp.is_success:
                return None
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug(f"Skip database fetch failed for {local_id}: {exc}")
            return None
        return data if isinstance(data, dict) else None

    def lookup(
        self,
        document: Optional[Dict[str, Any]],
        season: int | str,
        episode: int | str,
        *,
        serial: bool = True,
    ) -> Optional[List[SkipSegment]]:
        """Look up an episode, allowing the ``movie`` fallback for non-serials.

        ``LENIENT_MOVIE_FALLBACK`` extends the fallback to serial content.
        """
        movie_fallback = not serial or self.settings.LENIENT_MOVIE_FALLBACK
        return lookup_segments(
            document, season, episode, movie_fallback=movie_fallback
        )
