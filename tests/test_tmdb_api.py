import pytest
import responses

from vault_notes.api.tmdb_api import API_BASE, TMDBAPI

MOVIE = {
    "id": 603,
    "title": "The Matrix",
    "release_date": "1999-03-31",
    "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
    "overview": "Set in the 22nd century.",
    "poster_path": "/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
}

SHOW = {
    "id": 1429,
    "name": "Attack on Titan",
    "first_air_date": "2013-04-07",
    "genres": [{"id": 16, "name": "Animation"}, {"id": 10759, "name": "Action & Adventure"}],
    "overview": "",
    "poster_path": None,
}


@pytest.fixture
def tmdb(http_client):
    return TMDBAPI(http_client, "tmdb-token")


@responses.activate
def test_fetch_movie(tmdb):
    responses.add(
        responses.GET,
        f"{API_BASE}/movie/603",
        json=MOVIE,
        match=[responses.matchers.query_param_matcher({"language": "en-US"})],
    )

    record = tmdb.fetch(603, "movie")

    assert record.title == "The Matrix"
    assert record.slug == "the-matrix"
    assert record.kind == "movie"
    assert record.date_value == "1999-03-31"
    assert record.genres == ["Action", "Science Fiction"]
    assert record.cover_url == "https://image.tmdb.org/t/p/original/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg"
    assert record.list_tag == "watchlist"
    assert responses.calls[0].request.headers["Authorization"] == "Bearer tmdb-token"


@responses.activate
def test_fetch_tv_as_anime(tmdb):
    responses.add(responses.GET, f"{API_BASE}/tv/1429", json=SHOW)

    record = tmdb.fetch(1429, "anime")

    assert record.title == "Attack on Titan"
    assert record.kind == "anime"
    assert record.date_value == "2013-04-07"
    assert record.summary == "No summary available."
    assert record.cover_url is None


def test_fetch_tv_rejects_unknown_kind(tmdb):
    with pytest.raises(ValueError):
        tmdb.fetch_tv(1, "documentary")
