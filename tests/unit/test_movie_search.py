"""
Unit tests for the Kinopoisk search client.

HTTP calls are mocked; no network access is needed.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from app.services.movie_search import (
    MovieSearchClient,
    MovieSearchError,
    parse_movie,
)


SAMPLE_DOC = {
    "id": 326,
    "name": "Побег из Шоушенка",
    "alternativeName": "The Shawshank Redemption",
    "year": 1994,
    "rating": {"kp": 9.1, "imdb": 9.3},
    "poster": {"url": "https://img.example/326.jpg", "previewUrl": "https://img.example/326s.jpg"},
    "genres": [{"name": "драма"}],
    "shortDescription": "Two imprisoned men bond over a number of years.",
}


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    else:
        response.raise_for_status.return_value = None
    return response


class TestParseMovie:
    """Tests for converting API documents."""

    def test_full_document(self):
        movie = parse_movie(SAMPLE_DOC)

        assert movie.kinopoisk_id == "326"
        assert movie.title == "Побег из Шоушенка"
        assert movie.year == 1994
        assert movie.rating == 9.1
        assert movie.poster_url == "https://img.example/326.jpg"
        assert movie.genres == ["драма"]
        assert movie.description.startswith("Two imprisoned")

    def test_falls_back_to_alternative_name_and_preview(self):
        doc = {
            "id": 1,
            "name": None,
            "alternativeName": "Heat",
            "poster": {"previewUrl": "https://img.example/1s.jpg"},
            "description": "Long description",
        }

        movie = parse_movie(doc)

        assert movie.title == "Heat"
        assert movie.poster_url == "https://img.example/1s.jpg"
        assert movie.description == "Long description"
        assert movie.genres == []

    def test_zero_rating_is_none(self):
        movie = parse_movie({"id": 2, "name": "New", "rating": {"kp": 0}})

        assert movie.rating is None

    def test_missing_id_or_title_skipped(self):
        assert parse_movie({"name": "No id"}) is None
        assert parse_movie({"id": 3}) is None


class TestMovieSearchClient:
    """Tests for the HTTP client."""

    def test_empty_query_makes_no_request(self):
        client = MovieSearchClient(api_key="key")

        with patch.object(client.session, "get") as mock_get:
            assert client.search("   ") == []
            mock_get.assert_not_called()

    def test_disabled_without_key(self):
        client = MovieSearchClient(api_key="")

        assert client.enabled is False
        with pytest.raises(MovieSearchError):
            client.search("Heat")

    def test_search_sends_key_and_params(self):
        client = MovieSearchClient(api_key="secret", base_url="https://api.example/")

        with patch.object(client.session, "get", return_value=_response({"docs": [SAMPLE_DOC]})) as mock_get:
            results = client.search(" shawshank ", limit=3)

        assert [r.kinopoisk_id for r in results] == ["326"]
        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.example/v1.4/movie/search"
        assert kwargs["params"] == {"page": 1, "limit": 3, "query": "shawshank"}
        assert kwargs["headers"]["X-API-KEY"] == "secret"

    def test_unparseable_docs_dropped(self):
        client = MovieSearchClient(api_key="key")
        payload = {"docs": [SAMPLE_DOC, {"id": 9}]}

        with patch.object(client.session, "get", return_value=_response(payload)):
            results = client.search("shawshank")

        assert len(results) == 1

    def test_http_error_raises_search_error(self):
        client = MovieSearchClient(api_key="key")

        with patch.object(client.session, "get", return_value=_response({}, status_code=401)):
            with pytest.raises(MovieSearchError):
                client.search("Heat")

    def test_connection_error_raises_search_error(self):
        client = MovieSearchClient(api_key="key")

        with patch.object(
            client.session, "get", side_effect=requests.ConnectionError("down")
        ):
            with pytest.raises(MovieSearchError):
                client.search("Heat")

    def test_invalid_json_raises_search_error(self):
        client = MovieSearchClient(api_key="key")
        response = _response(None)
        response.json.side_effect = ValueError("not json")

        with patch.object(client.session, "get", return_value=response):
            with pytest.raises(MovieSearchError):
                client.search("Heat")
