"""
Genres Router

CRUD endpoints for genres.

Reads are open to any signed-in user (listing can be restricted to admins
with GENRE_LIST_ADMIN_ONLY); writes are admin only.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookworm.config import get_settings
from bookworm.dependencies import AdminIdentity, AuthIdentity, DbSession, GenreReader
from bookworm.models import Genre
from bookworm.schemas import GenreCreate, GenreResponse, GenreUpdate
from bookworm.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/genres",
    tags=["Genres"],
    responses={
        404: {"description": "Genre not found"},
    },
)


def get_genre_or_404(db: Session, genre_id: int) -> Genre:
    """Get a genre by ID or raise 404."""
    genre = db.get(Genre, genre_id)

    if genre is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Genre with id {genre_id} not found",
        )
    return genre


@router.get(
    "",
    response_model=List[GenreResponse],
    summary="List all genres",
    description="Get a list of all genres, alphabetically.",
)
@limiter.limit(settings.rate_limit_default)
def list_genres(
    request: Request,
    db: DbSession,
    identity: GenreReader,
) -> List[GenreResponse]:
    """List all genres."""
    stmt = select(Genre).order_by(Genre.name)
    genres = db.execute(stmt).scalars().all()
    return [GenreResponse.model_validate(g) for g in genres]


@router.get(
    "/{genre_id}",
    response_model=GenreResponse,
    summary="Get a genre by ID",
)
@limiter.limit(settings.rate_limit_default)
def get_genre(
    request: Request,
    genre_id: int,
    db: DbSession,
    identity: AuthIdentity,
) -> GenreResponse:
    """Get a single genre by ID."""
    return GenreResponse.model_validate(get_genre_or_404(db, genre_id))


@router.post(
    "",
    response_model=GenreResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new genre",
    description="Create a new genre. Admin only.",
)
@limiter.limit(settings.rate_limit_write)
def create_genre(
    request: Request,
    genre_data: GenreCreate,
    db: DbSession,
    identity: AdminIdentity,
) -> GenreResponse:
    """
    Create a new genre.

    Genre names must be unique. If a genre with the same name exists,
    a 409 Conflict error is returned.
    """
    genre = Genre(
        name=genre_data.name,
        description=genre_data.description,
    )

    try:
        db.add(genre)
        db.commit()
        db.refresh(genre)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Genre with name '{genre_data.name}' already exists",
        )

    logger.info(f"Genre created: {genre.name}")

    return GenreResponse.model_validate(genre)


@router.patch(
    "/{genre_id}",
    response_model=GenreResponse,
    summary="Update a genre",
    description="Update an existing genre's name or description. Admin only.",
)
@limiter.limit(settings.rate_limit_write)
def update_genre(
    request: Request,
    genre_id: int,
    genre_data: GenreUpdate,
    db: DbSession,
    identity: AdminIdentity,
) -> GenreResponse:
    """Update an existing genre. Only the fields sent are changed."""
    genre = get_genre_or_404(db, genre_id)

    update_data = genre_data.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    for field, value in update_data.items():
        setattr(genre, field, value)

    try:
        db.commit()
        db.refresh(genre)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Genre with name '{genre_data.name}' already exists",
        )

    logger.info(f"Genre {genre_id} updated: {sorted(update_data)}")

    return GenreResponse.model_validate(genre)


@router.delete(
    "/{genre_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a genre",
    description="Delete a genre. Books keep existing without it. Admin only.",
)
@limiter.limit(settings.rate_limit_write)
def delete_genre(
    request: Request,
    genre_id: int,
    db: DbSession,
    identity: AdminIdentity,
) -> None:
    """Delete a genre."""
    genre = get_genre_or_404(db, genre_id)
    db.delete(genre)
    db.commit()

    logger.info(f"Genre {genre_id} deleted")
