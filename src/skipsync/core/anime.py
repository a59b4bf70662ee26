"""Anime detection and MyAnimeList id resolution.

Only anime goes through the timing-service path, so this module decides
whether a card is anime and, if so, which title-index hit best matches the
requested season.

Tie-break policy for title-index hits, first match wins:
1. Season 1 with a known release year: first hit released that year.
2. Later seasons: first hit whose title, English title or a synonym mentions
   the season (``Season 2``, ``2nd Season``, ``Season2``).
3. The index's top-ranked hit.
"""

import re
from typing import List, Optional

from skipsync.metadata.clients.jikan import JikanClient
from skipsync.metadata.models import TitleCandidate
from skipsync.models.core import ContentCard
from skipsync.utils.debug import debug

ANIME_LANGUAGES = frozenset({"ja", "zh", "cn"})
ANIMATION_GENRE_ID = 16
ANIMATION_GENRE_NAME = "animation"

_YEAR_RE = re.compile(r"\(\d{4}\)")
_TV_RE = re.compile(r"\(TV\)", re.IGNORECASE)
_SEASON_RE = re.compile(r"Season \d+", re.IGNORECASE)
_PART_RE = re.compile(r"Part \d+", re.IGNORECASE)
_PUNCT_RE = re.compile(r"[:\-]")
_SPACE_RE = re.compile(r"\s+")


def classify_is_anime(card: Optional[ContentCard]) -> bool:
    """Return True for East-Asian originals or anything tagged as animation."""
    if card is None:
        return False
    if (card.original_language or "").lower() in ANIME_LANGUAGES:
        return True
    return any(
        genre.id == ANIMATION_GENRE_ID
        or (genre.name or "").lower() == ANIMATION_GENRE_NAME
        for genre in card.genres
    )


def clean_title(title: Optional[str]) -> str:
    """Strip year, ``(TV)``, season/part markers and punctuation from a title."""
    if not title:
        return ""
    cleaned = _YEAR_RE.sub("", title)
    cleaned = _TV_RE.sub("", cleaned)
    cleaned = _SEASON_RE.sub("", cleaned)
    cleaned = _PART_RE.sub("", cleaned)
    cleaned = _PUNCT_RE.sub(" ", cleaned)
    return _SPACE_RE.sub(" ", cleaned).strip()


def ordinal(n: int) -> str:
    """English ordinal: 1st, 2nd, 3rd, 4th, 11th, 12th, 13th, 21st."""
    if n % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def season_keywords(season: int) -> List[str]:
    return [f"Season {season}", f"{ordinal(season)} Season", f"Season{season}"]


def build_search_query(title: str, season: int) -> str:
    """Compose the title-index query, naming the season past the first."""
    query = clean_title(title)
    if season > 1:
        query = f"{query} Season {season}"
    return query


def pick_candidate(
    candidates: List[TitleCandidate], season: int, year: Optional[int]
) -> Optional[TitleCandidate]:
    """Apply the tie-break policy to title-index hits (see module docstring)."""
    if not candidates:
        return None

    if season == 1 and year:
        for candidate in candidates:
            if candidate.release_year() == year:
                return candidate

    if season > 1:
        keywords = [k.lower() for k in season_keywords(season)]
        for candidate in candidates:
            titles = [t.lower() for t in candidate.titles()]
            if any(k in t for t in titles for k in keywords):
                return candidate

    return candidates[0]


async def search_external_id(
    client: JikanClient, title: str, season: int, year: Optional[int] = None
) -> Optional[int]:
    """Resolve the MyAnimeList id for *title* at *season*.

    Args:
        client: Title-index client to query.
        title: Series title, cleaned or not.
        season: Requested season (1-based).
        year: Release year of the series, when known.

    Returns:
        The MyAnimeList id, or None when nothing matched or the lookup failed.
    """
    query = build_search_query(title, season)
    if not query:
        return None
    candidates = await client.search(query)
    match = pick_candidate(candidates, season, year)
    if match is None:
        debug(f"No title-index match for {query!r}")
        return None
    debug(f"Resolved {query!r} to MAL id {match.mal_id} ({match.title})")
    return match.mal_id
