"""
Shelves Router

Each reader has three shelves: want-to-read, currently-reading and read.

Endpoints:
- POST /shelf/{shelf} - Put a book on one of your shelves
- DELETE /shelf/{shelf}/{book_id} - Take a book off one of your shelves
- GET /want-to-read?email= - A reader's want-to-read shelf
- GET /currently-reading?email= - A reader's currently-reading shelf
- GET /read?email= - A reader's read shelf

Business Rules:
- Writes always act on the caller's own shelves
- Reading a shelf requires ?email= to be the caller's (admins may read any)
- A book appears at most once per shelf per reader
- The same book may sit on several shelves at once
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from bookworm.config import get_settings
from bookworm.dependencies import AuthIdentity, DbSession, OwnerIdentity
from bookworm.models import Book, ShelfName
from bookworm.schemas import ShelfAddResult, ShelfBookResponse, ShelfEntryCreate
from bookworm.services import shelves
from bookworm.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    tags=["Shelves"],
    responses={
        401: {"description": "Not authenticated"},
    },
)


@router.post(
    "/shelf/{shelf}",
    response_model=ShelfAddResult,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book to a shelf",
    description="""
    Put a book on one of the caller's shelves.

    - **201**: the book was added, `entry` holds the new row
    - **200**: the book was already there, `added` is false
    """,
    responses={
        200: {"description": "Book already on the shelf"},
        404: {"description": "Book not found"},
    },
)
@limiter.limit(settings.rate_limit_write)
def add_to_shelf(
    request: Request,
    response: Response,
    shelf: ShelfName,
    entry_data: ShelfEntryCreate,
    db: DbSession,
    identity: AuthIdentity,
) -> ShelfAddResult:
    """Add a book to the caller's shelf."""
    if db.get(Book, entry_data.book_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {entry_data.book_id} not found",
        )

    result = shelves.add_to_shelf(db, shelf, identity.email, entry_data.book_id)
    if not result.added:
        response.status_code = status.HTTP_200_OK

    return result


@router.delete(
    "/shelf/{shelf}/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a book from a shelf",
    responses={404: {"description": "Book is not on this shelf"}},
)
@limiter.limit(settings.rate_limit_write)
def remove_from_shelf(
    request: Request,
    shelf: ShelfName,
    book_id: int,
    db: DbSession,
    identity: AuthIdentity,
) -> None:
    """Take a book off the caller's shelf."""
    if not shelves.remove_from_shelf(db, shelf, identity.email, book_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book {book_id} is not on shelf '{shelf.value}'",
        )


# =============================================================================
# Shelf Listings
# =============================================================================
def _shelf_books(db, shelf: ShelfName, email: str) -> List[ShelfBookResponse]:
    return [
        ShelfBookResponse.model_validate(entry)
        for entry in shelves.list_shelf(db, shelf, email)
    ]


@router.get(
    "/want-to-read",
    response_model=List[ShelfBookResponse],
    summary="List the want-to-read shelf",
)
@limiter.limit(settings.rate_limit_default)
def list_want_to_read(
    request: Request,
    db: DbSession,
    identity: OwnerIdentity,
    email: str = Query(..., description="Shelf owner's email"),
) -> List[ShelfBookResponse]:
    """Books a reader plans to read, oldest addition first."""
    return _shelf_books(db, ShelfName.WANT_TO_READ, email)


@router.get(
    "/currently-reading",
    response_model=List[ShelfBookResponse],
    summary="List the currently-reading shelf",
)
@limiter.limit(settings.rate_limit_default)
def list_currently_reading(
    request: Request,
    db: DbSession,
    identity: OwnerIdentity,
    email: str = Query(..., description="Shelf owner's email"),
) -> List[ShelfBookResponse]:
    """Books a reader is reading now, oldest addition first."""
    return _shelf_books(db, ShelfName.CURRENTLY_READING, email)


@router.get(
    "/read",
    response_model=List[ShelfBookResponse],
    summary="List the read shelf",
)
@limiter.limit(settings.rate_limit_default)
def list_read(
    request: Request,
    db: DbSession,
    identity: OwnerIdentity,
    email: str = Query(..., description="Shelf owner's email"),
) -> List[ShelfBookResponse]:
    """Books a reader has finished, oldest addition first."""
    return _shelf_books(db, ShelfName.READ, email)
