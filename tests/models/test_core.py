"""Tests for the core domain models and host alias folding."""

from skipsync.models.core import (
    ContentCard,
    PlaybackRequest,
    PlaylistItem,
    SkipSegment,
)


def test_card_id_prefers_generic_id() -> None:
    card = ContentCard(id=42, kinopoisk_id=7, imdb_id="tt1")
    assert card.card_id == 42
    assert ContentCard(kp_id=9, imdb_id="tt1").card_id == 9
    assert ContentCard(imdb_id="tt1").card_id == "tt1"
    assert ContentCard().card_id is None


def test_local_id_sources() -> None:
    assert ContentCard(id=1, kinopoisk_id=7).local_id == 7
    assert ContentCard(id=5, source="kinopoisk").local_id == 5
    assert ContentCard(id=5, source="tmdb").local_id is None
    assert ContentCard(id=5, kp_id=11).local_id == 11


def test_is_serial() -> None:
    assert ContentCard(number_of_seasons=3).is_serial
    assert ContentCard(original_name="Show").is_serial
    assert not ContentCard(original_name="Show", original_title="Show").is_serial
    assert not ContentCard(original_title="Movie", number_of_seasons=0).is_serial


def test_release_year() -> None:
    assert ContentCard(release_date="2010-07-15").release_year == 2010
    assert ContentCard(first_air_date="2006-10-04").release_year == 2006
    assert ContentCard(release_date="0000-00-00").release_year is None
    assert ContentCard().release_year is None


def test_genres_accept_bare_ids_and_names() -> None:
    card = ContentCard(genres=[16, "Animation", {"id": 35, "name": "Comedy"}])
    assert [g.id for g in card.genres] == [16, None, 35]
    assert card.genres[1].name == "Animation"


def test_skip_segment_label_uses_name_on_the_wire() -> None:
    seg = SkipSegment.model_validate({"start": 90, "end": 180, "name": "Opening"})
    assert seg.label == "Opening"
    assert seg.model_dump(by_alias=True) == {
        "start": 90,
        "end": 180,
        "name": "Opening",
    }


def test_playlist_item_folds_host_aliases() -> None:
    item = PlaylistItem.model_validate(
        {"url": "u", "s": "2", "e": 3, "quality": {"720p": "x"}}
    )
    assert item.season == 2
    assert item.episode == 3
    assert item.model_extra is not None and "quality" in item.model_extra
    assert not {"s", "e"} & item.model_extra.keys()

    other = PlaylistItem.model_validate({"episode_number": 4})
    assert other.episode == 4
    assert other.season is None


def test_request_folds_movie_and_nested_segments() -> None:
    request = PlaybackRequest.model_validate(
        {
            "url": "http://video/1",
            "movie": {"id": 42, "title": "Film"},
            "segments": {"skip": [{"start": 1, "end": 2, "name": "Opening"}]},
            "playlist": None,
        }
    )
    assert request.card is not None and request.card.id == 42
    assert request.has_segments
    assert request.playlist == []


def test_host_payload_nests_segments() -> None:
    request = PlaybackRequest(
        url="u",
        playlist=[PlaylistItem(url="a", episode=1)],
        segments=[SkipSegment(start=1, end=2, label="Recap")],
    )
    payload = request.host_payload()
    assert payload["segments"] == {"skip": [{"start": 1, "end": 2, "name": "Recap"}]}
    assert payload["playlist"] == [{"url": "a", "episode": 1}]


def test_host_payload_drops_folded_aliases() -> None:
    request = PlaybackRequest.model_validate(
        {
            "url": "u",
            "movie": {"id": 42, "title": "Film"},
            "s": 2,
            "e": 3,
            "quality": "1080p",
            "playlist": [{"url": "a", "episode_number": 4, "s": 1}],
        }
    )
    payload = request.host_payload()

    assert payload["card"] == {"id": 42, "title": "Film", "genres": []}
    assert (payload["season"], payload["episode"]) == (2, 3)
    assert payload["quality"] == "1080p"
    assert not {"movie", "s", "e"} & payload.keys()
    assert payload["playlist"] == [{"url": "a", "season": 1, "episode": 4}]
