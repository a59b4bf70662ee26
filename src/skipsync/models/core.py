"""Core domain models for skipsync.

This module defines the data structures that flow through the skip-segment
resolution pipeline.
- Used to represent the title being played, the playback request handed over by
  the host player, and the skippable segments resolved for it.
- Host payloads use loose, loosely-typed keys (``e``/``episode_number``,
  ``s``, ``movie``); the models fold those aliases into a single field so the
  pipeline never has to look at more than one name.

Design:
- ContentCard carries every identifier a host may know about a title and
  derives the offset key, the community database key and the serial flag.
- SkipSegment is the canonical ``{start, end, label}`` form; the label is
  serialised under ``name`` so documents from the community database round-trip
  unchanged.
- PlaylistItem and PlaybackRequest keep unknown host fields (``extra="allow"``)
  so they can be handed back to the host untouched.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

YEAR_LENGTH = 4
DEFAULT_SEGMENT_LABEL = "Skip"

CardId = Union[int, str]


class Provenance(str, Enum):
    """Which provider supplied the segments for a resolution."""

    TIMING_SERVICE = "timing-service"
    COMMUNITY_DB = "community-db"


class Genre(BaseModel):
    """A genre tag as exposed by the host catalog."""

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    name: Optional[str] = None


class ContentCard(BaseModel):
    """Identifies a title (movie or series) in the host catalog.

    At least one of the generic id or the local catalog id should be present
    for database lookups to succeed; without them resolution simply finds
    nothing.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[CardId] = None
    """Host catalog id, also the preferred offset key."""

    kinopoisk_id: Optional[CardId] = None
    """Local catalog id used to key the community skip database."""

    kp_id: Optional[CardId] = None
    """Legacy spelling of the local catalog id."""

    imdb_id: Optional[str] = None
    source: Optional[str] = None
    """Catalog the card came from; ``kinopoisk`` means ``id`` is a local id."""

    title: Optional[str] = None
    name: Optional[str] = None
    original_title: Optional[str] = None
    original_name: Optional[str] = None
    original_language: Optional[str] = None

    genres: List[Genre] = Field(default_factory=list)
    number_of_seasons: Optional[int] = None

    release_date: Optional[str] = None
    """Movie release date (YYYY-MM-DD)."""

    first_air_date: Optional[str] = None
    """Series first air date (YYYY-MM-DD)."""

    @field_validator("genres", mode="before")
    @classmethod
    def _coerce_genres(cls, value: Any) -> Any:
        """Accept bare genre ids or names alongside genre objects."""
        if not isinstance(value, list):
            return [] if value is None else value
        coerced: List[Any] = []
        for genre in value:
            if isinstance(genre, bool):
                continue
            if isinstance(genre, int):
                coerced.append({"id": genre})
            elif isinstance(genre, str):
                coerced.append({"name": genre})
            else:
                coerced.append(genre)
        return coerced

    @property
    def card_id(self) -> Optional[CardId]:
        """Return the key under which the per-title offset is stored."""
        return self.id or self.kinopoisk_id or self.kp_id or self.imdb_id or None

    @property
    def local_id(self) -> Optional[CardId]:
        """Return the community skip database key, if known."""
        if self.kinopoisk_id:
            return self.kinopoisk_id
        if self.source == "kinopoisk" and self.id:
            return self.id
        return self.kp_id or None

    @property
    def is_serial(self) -> bool:
        """True when the card describes a series rather than a movie."""
        if self.number_of_seasons and self.number_of_seasons > 0:
            return True
        return bool(self.original_name and not self.original_title)

    @property
    def display_title(self) -> str:
        return self.title or self.name or ""

    @property
    def search_name(self) -> Optional[str]:
        """Return the name best suited for searching external title indexes."""
        return self.original_name or self.original_title or self.name

    @property
    def release_year(self) -> Optional[int]:
        """Extract the release (or first air) year, or None when unknown."""
        date_str = self.release_date or self.first_air_date
        if (
            date_str
            and len(date_str) >= YEAR_LENGTH
            and date_str[:YEAR_LENGTH].isdigit()
        ):
            year = int(date_str[:YEAR_LENGTH])
            return year or None
        return None


class PlaybackPosition(BaseModel):
    """Season/episode being played. Non-serial content is always 1/1."""

    season: int = Field(default=1, ge=1)
    episode: int = Field(default=1, ge=1)


class SkipSegment(BaseModel):
    """A single skippable interval, in seconds."""

    model_config = ConfigDict(populate_by_name=True)

    start: float
    end: float
    label: str = Field(default=DEFAULT_SEGMENT_LABEL, alias="name")

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> Any:
        """Community entries may carry a null or numeric name."""
        if value is None:
            return DEFAULT_SEGMENT_LABEL
        return value if isinstance(value, str) else str(value)


def _fold_segments(value: Any) -> Any:
    # Hosts nest skip segments as ``{"segments": {"skip": [...]}}``.
    if isinstance(value, dict):
        return value.get("skip")
    return value


def _fold_position_aliases(data: Dict[str, Any]) -> Dict[str, Any]:
    # Aliases are consumed; only the canonical field survives.
    data = dict(data)
    for alias in ("e", "episode_number"):
        value = data.pop(alias, None)
        if value and not data.get("episode"):
            data["episode"] = value
    season_alias = data.pop("s", None)
    if season_alias and not data.get("season"):
        data["season"] = season_alias
    for key in ("season", "episode"):
        if not data.get(key):
            data[key] = None
    if "segments" in data:
        data["segments"] = _fold_segments(data["segments"])
    return data


class PlaylistItem(BaseModel):
    """One entry of a multi-episode playlist handed over by the host."""

    model_config = ConfigDict(extra="allow")

    url: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    segments: Optional[List[SkipSegment]] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_aliases(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return _fold_position_aliases(data)
        return data

    @property
    def has_segments(self) -> bool:
        return bool(self.segments)


class PlaybackRequest(BaseModel):
    """Parameters of a single playback start, as received from the host."""

    model_config = ConfigDict(extra="allow")

    url: Optional[str] = None
    title: Optional[str] = None
    card: Optional[ContentCard] = None
    playlist: List[PlaylistItem] = Field(default_factory=list)
    season: Optional[int] = None
    episode: Optional[int] = None
    segments: Optional[List[SkipSegment]] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_aliases(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = _fold_position_aliases(data)
        movie = data.pop("movie", None)
        if movie and not data.get("card"):
            data["card"] = movie
        if data.get("playlist") is None:
            data["playlist"] = []
        return data

    @property
    def has_segments(self) -> bool:
        return bool(self.segments)

    def host_payload(self) -> Dict[str, Any]:
        """Serialise back into the nested shape the host player expects."""

        def dump_segments(segments: Optional[List[SkipSegment]]) -> Any:
            if segments is None:
                return None
            return {"skip": [seg.model_dump(by_alias=True) for seg in segments]}

        payload = self.model_dump(
            by_alias=True, exclude_none=True, exclude={"segments", "playlist"}
        )
        if self.segments is not None:
            payload["segments"] = dump_segments(self.segments)
        playlist = []
        for item in self.playlist:
            entry = item.model_dump(
                by_alias=True, exclude_none=True, exclude={"segments"}
            )
            if item.segments is not None:
                entry["segments"] = dump_segments(item.segments)
            playlist.append(entry)
        if playlist:
            payload["playlist"] = playlist
        return payload


class Resolution(BaseModel):
    """Outcome of a successful skip-segment resolution."""

    segments: List[SkipSegment]
    provenance: Provenance
    position: PlaybackPosition
