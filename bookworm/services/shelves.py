"""
Shelf Service

Business logic for the three reading shelves.

Entries are addressed by (shelf, email, book_id). Adding checks for an
existing entry first; the unique constraint on shelf_entries catches the
case where two identical requests pass that check at the same time, and
both paths report "already in shelf".
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager, selectinload

from bookworm.models import Book, ShelfEntry, ShelfName
from bookworm.schemas.shelf import (
    ALREADY_IN_SHELF,
    ShelfAddResult,
    ShelfCount,
    ShelfEntryResponse,
)

logger = logging.getLogger(__name__)


def _owner_filter(email: str):
    return func.lower(ShelfEntry.email) == email.lower()


def find_entry(
    db: Session,
    shelf: ShelfName,
    email: str,
    book_id: int,
) -> ShelfEntry | None:
    """Return the entry for (shelf, email, book_id) if there is one."""
    stmt = select(ShelfEntry).where(
        ShelfEntry.shelf == shelf.value,
        _owner_filter(email),
        ShelfEntry.book_id == book_id,
    )
    return db.execute(stmt).scalars().first()


def add_to_shelf(
    db: Session,
    shelf: ShelfName,
    email: str,
    book_id: int,
) -> ShelfAddResult:
    """
    Put a book on a reader's shelf.

    Args:
        db: Database session
        shelf: Target shelf
        email: Owner email
        book_id: Book to add (must exist; callers check)

    Returns:
        ShelfAddResult with added=True and the new entry, or added=False
        and reason "already in shelf"
    """
    if find_entry(db, shelf, email, book_id) is not None:
        logger.info(f"Book {book_id} already on {shelf.value} for {email}")
        return ShelfAddResult(added=False, reason=ALREADY_IN_SHELF)

    entry = ShelfEntry(shelf=shelf.value, email=email, book_id=book_id)
    try:
        db.add(entry)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Concurrent add of book {book_id} to {shelf.value} for {email}")
        return ShelfAddResult(added=False, reason=ALREADY_IN_SHELF)

    db.refresh(entry)
    logger.info(f"Added book {book_id} to {shelf.value} for {email}")

    return ShelfAddResult(
        added=True,
        entry=ShelfEntryResponse.model_validate(entry),
    )


def list_shelf(db: Session, shelf: ShelfName, email: str) -> list[ShelfEntry]:
    """
    List a reader's entries on one shelf, each joined with its book.

    The join is an inner join: entries whose book no longer exists are
    left out. Oldest entries come first.
    """
    stmt = (
        select(ShelfEntry)
        .join(ShelfEntry.book)
        .options(
            contains_eager(ShelfEntry.book).options(
                selectinload(Book.genres),
                selectinload(Book.reviews),
            )
        )
        .where(ShelfEntry.shelf == shelf.value, _owner_filter(email))
        .order_by(ShelfEntry.created_at, ShelfEntry.id)
    )
    return list(db.execute(stmt).scalars().all())


def remove_from_shelf(
    db: Session,
    shelf: ShelfName,
    email: str,
    book_id: int,
) -> bool:
    """
    Take a book off a reader's shelf.

    Returns:
        True if an entry was deleted, False if there was none
    """
    stmt = delete(ShelfEntry).where(
        ShelfEntry.shelf == shelf.value,
        _owner_filter(email),
        ShelfEntry.book_id == book_id,
    )
    result = db.execute(stmt)
    db.commit()

    removed = result.rowcount > 0
    if removed:
        logger.info(f"Removed book {book_id} from {shelf.value} for {email}")
    return removed


def shelf_counts(db: Session, email: str) -> list[ShelfCount]:
    """
    Count a reader's books on every shelf.

    Always returns all three shelves, in the fixed order
    Currently Reading, Want To Read, Read, with zero for empty shelves.
    Entries whose book no longer exists are not counted.
    """
    stmt = (
        select(ShelfEntry.shelf, func.count(ShelfEntry.id))
        .join(Book, Book.id == ShelfEntry.book_id)
        .where(_owner_filter(email))
        .group_by(ShelfEntry.shelf)
    )
    counts = {shelf: count for shelf, count in db.execute(stmt).all()}

    return [
        ShelfCount(name=shelf.label, count=counts.get(shelf.value, 0))
        for shelf in ShelfName
    ]
