"""Business logic for the movie watchlist."""

from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.movie import Movie
from app.services.errors import Conflict, ValidationError
from app.services.household_service import (
    OwnedEntityService,
    optional_text,
    require_text,
    split_by_flag,
)
from app.services.movie_search import MovieSearchResult


class MovieService(OwnedEntityService):
    """Service for watchlist operations."""

    model = Movie
    editable_fields = ("comment", "watched")

    def add_movie(
        self,
        db: Session,
        owner_id: UUID,
        title: str,
        poster_url: Optional[str] = None,
        kinopoisk_id: Optional[str] = None,
        comment: Optional[str] = None,
        rating: Optional[Decimal] = None,
        genres: Optional[List[str]] = None,
        year: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Movie:
        if rating is not None and not 0 <= rating <= 10:
            raise ValidationError("Rating must be between 0 and 10")
        return self.create(
            db,
            owner_id,
            title=require_text(title, "Title"),
            poster_url=optional_text(poster_url),
            kinopoisk_id=optional_text(kinopoisk_id),
            comment=optional_text(comment),
            rating=rating,
            genres=genres or None,
            year=year,
            description=optional_text(description),
        )

    def add_from_search(
        self, db: Session, owner_id: UUID, result: MovieSearchResult
    ) -> Movie:
        """Add a movie picked from the search results, once per household."""
        if self.is_on_list(db, owner_id, result.kinopoisk_id):
            raise Conflict("This movie is already on your list")
        return self.add_movie(
            db,
            owner_id,
            title=result.title,
            poster_url=result.poster_url,
            kinopoisk_id=result.kinopoisk_id,
            rating=Decimal(str(result.rating)) if result.rating is not None else None,
            genres=result.genres,
            year=result.year,
            description=result.description,
        )

    def set_comment(
        self, db: Session, movie_id: UUID, viewer_id: UUID, comment: Optional[str]
    ) -> Movie:
        return self.update(db, movie_id, viewer_id, comment=optional_text(comment))

    def toggle_watched(self, db: Session, movie_id: UUID, viewer_id: UUID) -> Movie:
        return self.toggle(db, movie_id, viewer_id, "watched")

    def grouped(self, db: Session, viewer_id: UUID) -> Dict[str, List[Movie]]:
        """Unwatched and watched movies, newest first."""
        return split_by_flag(self.list_visible(db, viewer_id), "watched")

    def is_on_list(self, db: Session, viewer_id: UUID, kinopoisk_id: str) -> bool:
        return (
            self.query_visible(db, viewer_id, Movie.kinopoisk_id == kinopoisk_id).first()
            is not None
        )


# Singleton instance
movie_service = MovieService()
