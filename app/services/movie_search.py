"""Client for the Kinopoisk movie search API."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass
class MovieSearchResult:
    """Normalised search hit used to prefill a watchlist entry."""

    kinopoisk_id: str
    title: str
    year: Optional[int] = None
    poster_url: Optional[str] = None
    rating: Optional[float] = None
    genres: List[str] = field(default_factory=list)
    description: Optional[str] = None


class MovieSearchError(Exception):
    """Movie search API is unavailable or returned an error."""

    pass


def parse_movie(doc: dict) -> Optional[MovieSearchResult]:
    """Convert one Kinopoisk ``docs`` entry; entries without id or title are skipped."""
    movie_id = doc.get("id")
    title = doc.get("name") or doc.get("alternativeName")
    if movie_id is None or not title:
        return None

    poster = doc.get("poster") or {}
    rating = (doc.get("rating") or {}).get("kp")
    genres = [g["name"] for g in doc.get("genres") or [] if g.get("name")]

    return MovieSearchResult(
        kinopoisk_id=str(movie_id),
        title=title,
        year=doc.get("year"),
        poster_url=poster.get("url") or poster.get("previewUrl"),
        rating=float(rating) if rating else None,
        genres=genres,
        description=doc.get("shortDescription") or doc.get("description"),
    )


class MovieSearchClient:
    """
    Thin wrapper around ``GET /v1.4/movie/search``.

    Retries transient server errors; any remaining failure surfaces as
    MovieSearchError so the caller can show a message.
    """

    MAX_RETRIES = 2
    BACKOFF_FACTOR = 0.5

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.kinopoisk_api_key
        self.base_url = (base_url or settings.kinopoisk_base_url).rstrip("/")
        self.timeout = timeout or settings.kinopoisk_timeout

        self.session = requests.Session()
        retry_strategy = Retry(
            total=self.MAX_RETRIES,
            backoff_factor=self.BACKOFF_FACTOR,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update({"Accept": "application/json"})

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def search(self, query: str, limit: int = 5) -> List[MovieSearchResult]:
        """Search movies by title. An empty query returns no results."""
        query = (query or "").strip()
        if not query:
            return []
        if not self.enabled:
            raise MovieSearchError("Movie search is not configured")

        try:
            response = self.session.get(
                f"{self.base_url}/v1.4/movie/search",
                params={"page": 1, "limit": limit, "query": query},
                headers={"X-API-KEY": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Kinopoisk search failed for %r: %s", query, e)
            raise MovieSearchError("Movie search is temporarily unavailable") from e

        results = []
        for doc in payload.get("docs") or []:
            movie = parse_movie(doc)
            if movie is not None:
                results.append(movie)
        return results


def get_movie_search_client() -> MovieSearchClient:
    """FastAPI dependency; overridden in tests."""
    return MovieSearchClient()
