"""
Genre Model

Genres are the catalog's only classification. Books are tagged with genres
by *name* through the API (BookCreate.genres = ["Fantasy", ...]), so a
genre's name is its public key. The genre statistics count one book once
per genre it is tagged with.

Deleting a genre removes its tags from books but never the books.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookworm.database import Base

if TYPE_CHECKING:
    from bookworm.models.book import Book


class Genre(Base):
    """A named catalog genre, joined to books through book_genres."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Public key: lookups from book payloads and stats grouping use it
    name: Mapped[str] = mapped_column(
        String(100), unique=True, index=True, comment="Name books are tagged with"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text, comment="Free-text description shown in the catalog"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Deleting a genre unlinks its books; the books themselves stay
    books: Mapped[List["Book"]] = relationship(
        secondary="book_genres",
        back_populates="genres",
    )

    def __repr__(self) -> str:
        return f"Genre({self.name!r})"
