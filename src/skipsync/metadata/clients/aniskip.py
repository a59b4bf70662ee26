"""AniSkip timing-service client.

Fetches opening, ending and recap intervals for one episode of an anime,
keyed by MyAnimeList id.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, List

import httpx

from skipsync.metadata.base import ProviderClient

logger = logging.getLogger(__name__)

SKIP_TYPES: tuple[str, ...] = ("op", "ed", "recap")


class AniSkipClient(ProviderClient):
    """Client for ``GET /skip-times/{mal_id}/{episode}``."""

    provider = "aniskip"

    @property
    def base_url(self) -> str:
        return self.settings.ANISKIP_API_URL.rstrip("/")

    async def fetch(self, external_id: int | str, episode: int) -> List[Dict[str, Any]]:
        """Return the raw ``results`` entries for an episode.

        A 404 means AniSkip has no data for the episode; like every other
        failure it yields an empty list.
        """
        url = f"{self.base_url}/{external_id}/{episode}"
        params = [("types", skip_type) for skip_type in SKIP_TYPES]
        params.append(("episodeLength", "0"))
        try:
            resp = await self._get(url, params=params)
            if resp.status_code == HTTPStatus.NOT_FOUND:
                return []
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug(f"AniSkip lookup failed for {external_id}/{episode}: {exc}")
            return []

        if not isinstance(data, dict) or not data.get("found"):
            return []
        results = data.get("results")
        if not isinstance(results, list):
            return []
        return results
