"""Playback position detection and playlist propagation.

Playlist entries do not always carry season/episode metadata. When they do
not, an entry's position in the list stands in for its episode number; this is
a degraded mode that breaks if the host reorders the playlist, so explicit
metadata always wins.
"""

from typing import List, Optional

from skipsync.models.core import (
    PlaybackPosition,
    PlaybackRequest,
    PlaylistItem,
    SkipSegment,
)
from skipsync.utils.debug import debug


def item_position(
    item: PlaylistItem, index: int, default_season: int
) -> PlaybackPosition:
    """Return an entry's season/episode, inferring the episode from *index*."""
    episode = item.episode
    if not episode or episode < 1:
        episode = index + 1
    season = item.season if item.season and item.season > 0 else default_season
    return PlaybackPosition(season=season, episode=episode)


def detect_position(
    request: PlaybackRequest, default_season: int = 1
) -> PlaybackPosition:
    """Work out which season/episode a playback request is for.

    Args:
        request: The host's playback parameters.
        default_season: Season assumed when none is given.

    Returns:
        Explicit request fields when present; otherwise the position of the
        playlist entry whose url matches the request; otherwise 1/1.
    """
    if request.episode and request.episode > 0:
        season = request.season if request.season and request.season > 0 else None
        return PlaybackPosition(
            season=season or default_season, episode=request.episode
        )

    if request.url:
        for index, item in enumerate(request.playlist):
            if item.url and item.url == request.url:
                if not item.episode:
                    debug(f"Inferring episode {index + 1} from playlist position")
                return item_position(item, index, default_season)

    return PlaybackPosition(season=default_season, episode=1)


def propagate(
    playlist: Optional[List[PlaylistItem]],
    season: int,
    episode: int,
    segments: List[SkipSegment],
) -> int:
    """Copy *segments* onto playlist entries for the same season/episode.

    Entries that already carry segments are left alone.

    Returns:
        The number of entries updated.
    """
    updated = 0
    for index, item in enumerate(playlist or []):
        if item.has_segments:
            continue
        position = item_position(item, index, season)
        if position.season == season and position.episode == episode:
            item.segments = list(segments)
            updated += 1
    return updated
