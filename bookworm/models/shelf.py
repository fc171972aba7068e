"""
Shelf Entry Model

A reader's membership of a book on one of three shelves.

The three shelves share a single table discriminated by the `shelf`
column. A (shelf, email, book) triple appears at most once; the unique
constraint backs up the existence check done before inserting.
"""

from datetime import UTC, datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookworm.database import Base


class ShelfName(str, Enum):
    """
    The reading shelves, in the order their counts are reported.

    Values double as URL segments (/shelf/want-to-read, /read, ...).
    """
    CURRENTLY_READING = "currently-reading"
    WANT_TO_READ = "want-to-read"
    READ = "read"

    @property
    def label(self) -> str:
        """Human-readable name used in shelf counts."""
        return SHELF_LABELS[self]


SHELF_LABELS = {
    ShelfName.CURRENTLY_READING: "Currently Reading",
    ShelfName.WANT_TO_READ: "Want To Read",
    ShelfName.READ: "Read",
}


class ShelfEntry(Base):
    """
    Shelf entry model.

    Table: shelf_entries

    Entries are keyed by the reader's email rather than user id, so that
    shelves are addressed the same way clients query them (?email=...).
    """

    __tablename__ = "shelf_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    shelf: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        index=True,
        comment="Shelf name (want-to-read, currently-reading, read)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Owner email",
    )
    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    book = relationship("Book", back_populates="shelf_entries")

    __table_args__ = (
        UniqueConstraint("shelf", "email", "book_id", name="uq_shelf_email_book"),
    )

    def __repr__(self) -> str:
        return (
            f"<ShelfEntry(id={self.id}, shelf={self.shelf!r}, "
            f"email={self.email!r}, book_id={self.book_id})>"
        )
