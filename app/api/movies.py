"""API endpoints for the movie watchlist and Kinopoisk search."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.common import OwnedOut, serialize, serialize_all
from app.database import get_db
from app.models.user import User
from app.services.auth.dependencies import get_current_user
from app.services.movie_search import (
    MovieSearchClient,
    MovieSearchError,
    MovieSearchResult,
    get_movie_search_client,
)
from app.services.movie_service import movie_service

router = APIRouter(prefix="/movies", tags=["movies"])


# =============================================================================
# Request/Response Models
# =============================================================================


class MovieIn(BaseModel):
    title: str = Field(..., max_length=500)
    poster_url: Optional[str] = Field(None, max_length=1024)
    comment: Optional[str] = None
    rating: Optional[Decimal] = None
    genres: Optional[List[str]] = None
    year: Optional[int] = None
    description: Optional[str] = None


class SearchPick(BaseModel):
    """A search hit chosen by the user, echoed back from /movies/search."""

    kinopoisk_id: str
    title: str
    year: Optional[int] = None
    poster_url: Optional[str] = None
    rating: Optional[float] = None
    genres: List[str] = []
    description: Optional[str] = None


class CommentIn(BaseModel):
    comment: Optional[str] = None


class MovieOut(OwnedOut):
    title: str
    poster_url: Optional[str] = None
    kinopoisk_id: Optional[str] = None
    comment: Optional[str] = None
    watched: bool
    rating: Optional[float] = None
    genres: Optional[List[str]] = None
    year: Optional[int] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class Watchlist(BaseModel):
    to_watch: List[MovieOut]
    watched: List[MovieOut]


class SearchHit(SearchPick):
    on_list: bool = False


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=Watchlist)
async def list_movies(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    groups = movie_service.grouped(db, user.id)
    return Watchlist(
        to_watch=serialize_all(MovieOut, groups["open"], user.id),
        watched=serialize_all(MovieOut, groups["done"], user.id),
    )


@router.get("/search", response_model=List[SearchHit])
async def search_movies(
    q: str = Query("", max_length=200),
    limit: int = Query(5, ge=1, le=20),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    client: MovieSearchClient = Depends(get_movie_search_client),
):
    """
    Search Kinopoisk by title.

    Each hit says whether the household already has it on the list.
    Returns 502 when the search provider cannot be reached.
    """
    try:
        results = client.search(q, limit=limit)
    except MovieSearchError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return [
        SearchHit(
            **vars(result),
            on_list=movie_service.is_on_list(db, user.id, result.kinopoisk_id),
        )
        for result in results
    ]


@router.post("", response_model=MovieOut, status_code=status.HTTP_201_CREATED)
async def add_movie(body: MovieIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Add a movie entered by hand."""
    movie = movie_service.add_movie(db, user.id, **body.model_dump())
    return serialize(MovieOut, movie, user.id)


@router.post("/from-search", response_model=MovieOut, status_code=status.HTTP_201_CREATED)
async def add_from_search(
    body: SearchPick,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Add a movie picked from search results. 409 if it is already on the list."""
    movie = movie_service.add_from_search(db, user.id, MovieSearchResult(**body.model_dump()))
    return serialize(MovieOut, movie, user.id)


@router.patch("/{movie_id}/comment", response_model=MovieOut)
async def set_comment(
    movie_id: UUID,
    body: CommentIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    movie = movie_service.set_comment(db, movie_id, user.id, body.comment)
    return serialize(MovieOut, movie, user.id)


@router.post("/{movie_id}/toggle", response_model=MovieOut)
async def toggle_watched(movie_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    movie = movie_service.toggle_watched(db, movie_id, user.id)
    return serialize(MovieOut, movie, user.id)


@router.delete("/{movie_id}")
async def delete_movie(movie_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    movie_service.delete(db, movie_id, user.id)
    return {"success": True}
