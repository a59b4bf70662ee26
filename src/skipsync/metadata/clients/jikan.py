"""Jikan (MyAnimeList) title-index client.

Used to map a local anime title to the MyAnimeList id that keys the AniSkip
timing service.
"""

import logging
from typing import List

import httpx
from pydantic import ValidationError

from skipsync.metadata.base import ProviderClient
from skipsync.metadata.models import TitleCandidate

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


class JikanClient(ProviderClient):
    """Client for the Jikan anime search endpoint. No authentication needed."""

    provider = "jikan"

    @property
    def base_url(self) -> str:
        return self.settings.JIKAN_API_URL.rstrip("/")

    async def search(
        self, query: str, limit: int = SEARCH_LIMIT
    ) -> List[TitleCandidate]:
        """Search anime titles, keeping Jikan's relevance order.

        Args:
            query: Free-text search string.
            limit: Maximum number of hits requested.

        Returns:
            A list of TitleCandidate objects; empty on any failure.
        """
        try:
            resp = await self._get(self.base_url, params={"q": query, "limit": limit})
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug(f"Jikan search failed for {query!r}: {exc}")
            return []

        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []

        candidates: List[TitleCandidate] = []
        for item in items:
            try:
                candidates.append(TitleCandidate.model_validate(item))
            except ValidationError:
                logger.debug(f"Skipping malformed Jikan entry: {item!r}")
        return candidates
