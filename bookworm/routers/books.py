"""
Books Router

CRUD endpoints for the book catalog.

Demonstrates:
- Pagination with total page count
- Title search, genre filter and rating sort
- Genre membership by name
- Admin-only writes
"""

import logging
import math
from typing import Sequence

from fastapi import APIRouter, HTTPException, Query, Request, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from bookworm.config import get_settings
from bookworm.dependencies import (
    AdminIdentity,
    AuthIdentity,
    DbSession,
    Pagination,
    get_book_or_404,
)
from bookworm.models import Book, Genre
from bookworm.schemas import (
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
    RatingSort,
)
from bookworm.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def resolve_genres(db: Session, names: Sequence[str]) -> list[Genre]:
    """
    Look up genres by name, in the order given.

    Raises:
        HTTPException: 400 if any name is not an existing genre
    """
    if not names:
        return []

    genres = db.execute(select(Genre).where(Genre.name.in_(names))).scalars().all()
    by_name = {genre.name: genre for genre in genres}

    missing = [name for name in names if name not in by_name]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Genres not found: {', '.join(missing)}",
        )

    return [by_name[name] for name in names]


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=BookListResponse,
    summary="List books",
    description="Get a paginated list of books with optional search, genre filter and rating sort.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    identity: AuthIdentity,
    pagination: Pagination,
    search: str | None = Query(
        default=None,
        max_length=100,
        description="Case-insensitive substring of the title",
        examples=["hobbit"],
    ),
    genre: str | None = Query(
        default=None,
        max_length=100,
        description="Exact genre name",
        examples=["Fantasy"],
    ),
    sort: RatingSort | None = Query(
        default=None,
        description="Sort by rating (asc or desc); newest first when omitted",
    ),
) -> BookListResponse:
    """
    List books with pagination and optional filtering.

    Examples:
        GET /books?page=2&limit=10
        GET /books?search=ring&genre=Fantasy&sort=desc

    Returns:
        {result, total, page, limit, total_page}
    """
    stmt = select(Book)

    if search:
        stmt = stmt.where(
            func.lower(Book.title).like(f"%{escape_like(search.lower())}%", escape="\\")
        )

    if genre:
        genre_book_ids = (
            select(Book.id)
            .join(Book.genres)
            .where(Genre.name == genre)
        )
        stmt = stmt.where(Book.id.in_(genre_book_ids))

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = db.execute(count_stmt).scalar() or 0

    total_page = math.ceil(total / pagination.limit)

    if sort is RatingSort.ASC:
        stmt = stmt.order_by(Book.rating.asc(), Book.id)
    elif sort is RatingSort.DESC:
        stmt = stmt.order_by(Book.rating.desc(), Book.id)
    else:
        stmt = stmt.order_by(Book.created_at.desc(), Book.id.desc())

    stmt = (
        stmt
        .options(selectinload(Book.genres), selectinload(Book.reviews))
        .offset(pagination.skip)
        .limit(pagination.limit)
    )
    books = db.execute(stmt).scalars().all()

    return BookListResponse(
        result=[BookResponse.model_validate(book) for book in books],
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        total_page=total_page,
    )


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
    description="Retrieve a book with its genres and reviews.",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: int,
    db: DbSession,
    identity: AuthIdentity,
) -> BookResponse:
    """Get a single book by its ID."""
    return BookResponse.model_validate(get_book_or_404(db, book_id))


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Add a book to the catalog. Genres are given by name. Admin only.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
    identity: AdminIdentity,
) -> BookResponse:
    """
    Create a new book.

    Raises:
        HTTPException: 400 if a genre name doesn't exist
    """
    book = Book(**book_data.model_dump(exclude={"genres"}))
    book.genres = resolve_genres(db, book_data.genres)

    db.add(book)
    db.commit()

    logger.info(f"Book created: {book.id} '{book.title}'")

    return BookResponse.model_validate(get_book_or_404(db, book.id))


@router.patch(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    description="Update a book's catalog fields and genres. Admin only.",
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
    identity: AdminIdentity,
) -> BookResponse:
    """
    Update an existing book.

    Only provided fields are updated. A genres list replaces the book's
    genre set; an explicit null for a required column is ignored.

    Raises:
        HTTPException: 404 if book not found
        HTTPException: 400 if a genre name doesn't exist
    """
    book = get_book_or_404(db, book_id)

    update_data = book_data.model_dump(exclude_unset=True)

    if "genres" in update_data:
        genre_names = update_data.pop("genres")
        if genre_names is not None:
            book.genres = resolve_genres(db, genre_names)

    for field in ("title", "rating"):
        if update_data.get(field, 0) is None:
            update_data.pop(field)

    for field, value in update_data.items():
        setattr(book, field, value)

    db.commit()

    logger.info(f"Book {book_id} updated")

    return BookResponse.model_validate(get_book_or_404(db, book_id))


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    description="Delete a book together with its reviews and shelf entries. Admin only.",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
    identity: AdminIdentity,
) -> None:
    """Delete a book. Returns 204 No Content on success."""
    book = get_book_or_404(db, book_id)
    db.delete(book)
    db.commit()

    logger.info(f"Book {book_id} deleted")
