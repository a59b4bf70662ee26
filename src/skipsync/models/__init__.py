"""Data models for skipsync."""

from skipsync.models.core import (
    ContentCard,
    Genre,
    PlaybackPosition,
    PlaybackRequest,
    PlaylistItem,
    Provenance,
    Resolution,
    SkipSegment,
)

__all__ = [
    "ContentCard",
    "Genre",
    "PlaybackPosition",
    "PlaybackRequest",
    "PlaylistItem",
    "Provenance",
    "Resolution",
    "SkipSegment",
]
