"""Tests for playback position detection and playlist propagation."""

from skipsync.core.playlist import detect_position, item_position, propagate
from skipsync.models.core import PlaybackRequest, PlaylistItem, SkipSegment

SEGMENTS = [SkipSegment(start=90, end=180, label="Opening")]


def test_detect_position_from_explicit_fields() -> None:
    request = PlaybackRequest.model_validate({"e": 5, "s": 2})
    position = detect_position(request)
    assert (position.season, position.episode) == (2, 5)

    request = PlaybackRequest.model_validate({"episode_number": 3})
    position = detect_position(request)
    assert (position.season, position.episode) == (1, 3)


def test_detect_position_from_playlist_index() -> None:
    request = PlaybackRequest.model_validate(
        {
            "url": "http://v/3",
            "playlist": [
                {"url": "http://v/1"},
                {"url": "http://v/2"},
                {"url": "http://v/3", "season": 2},
            ],
        }
    )
    position = detect_position(request)
    assert (position.season, position.episode) == (2, 3)


def test_detect_position_prefers_item_metadata_over_index() -> None:
    request = PlaybackRequest.model_validate(
        {
            "url": "http://v/b",
            "playlist": [
                {"url": "http://v/a", "episode": 7},
                {"url": "http://v/b", "episode": 8, "season": 3},
            ],
        }
    )
    position = detect_position(request)
    assert (position.season, position.episode) == (3, 8)


def test_detect_position_defaults() -> None:
    position = detect_position(PlaybackRequest(url="http://v/x"))
    assert (position.season, position.episode) == (1, 1)

    request = PlaybackRequest.model_validate(
        {"url": "http://v/missing", "playlist": [{"url": "http://v/1"}]}
    )
    position = detect_position(request)
    assert (position.season, position.episode) == (1, 1)


def test_item_position_uses_default_season() -> None:
    position = item_position(PlaylistItem(url="x"), 4, default_season=3)
    assert (position.season, position.episode) == (3, 5)


def test_propagate_fills_matching_entries() -> None:
    playlist = [
        PlaylistItem(url="a"),
        PlaylistItem(url="b"),
        PlaylistItem(url="c", season=1, episode=2),
        PlaylistItem(url="d", season=2, episode=2),
    ]
    updated = propagate(playlist, 1, 2, SEGMENTS)

    assert updated == 2
    assert playlist[0].segments is None
    assert playlist[1].segments == SEGMENTS
    assert playlist[2].segments == SEGMENTS
    assert playlist[3].segments is None
    assert playlist[1].segments is not SEGMENTS


def test_propagate_never_overwrites_existing_segments() -> None:
    existing = [SkipSegment(start=1, end=2, label="Recap")]
    playlist = [PlaylistItem(url="a", episode=1, segments=existing)]

    assert propagate(playlist, 1, 1, SEGMENTS) == 0
    assert playlist[0].segments == existing


def test_propagate_handles_missing_playlist() -> None:
    assert propagate(None, 1, 1, SEGMENTS) == 0
    assert propagate([], 1, 1, SEGMENTS) == 0
