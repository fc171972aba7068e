"""
Book Model

The central model of the BookWorm API, representing books in the catalog.

This file also contains the association table for the many-to-many
relationship between books and genres.

WHY an Association Table?
=========================
A book has a set of genres and a genre contains many books. Relational
databases model that with a junction table holding one row per
(book, genre) pair. The pair is the primary key, so a book can't list
the same genre twice.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookworm.database import Base

if TYPE_CHECKING:
    from bookworm.models.genre import Genre
    from bookworm.models.review import Review
    from bookworm.models.shelf import ShelfEntry


# =============================================================================
# Association Table
# =============================================================================
book_genres = Table(
    "book_genres",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        Integer,
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table linking books to their genres",
)


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title (required)
    - author: Author name as printed on the cover
    - description: Summary/blurb
    - cover_image: URL of the cover image
    - total_pages: Number of pages
    - publication_year: Year of first publication
    - rating: Catalog rating from 0 to 5, used for sorting

    Relationships:
    - genres: Many-to-Many (a book can belong to multiple genres)
    - reviews: One-to-Many, in submission order, deleted with the book
    - shelf_entries: One-to-Many, deleted with the book

    Example:
        book = Book(
            title="The Hobbit",
            author="J.R.R. Tolkien",
            total_pages=310,
            rating=4.7,
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Catalog Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Author name"
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book description or summary"
    )

    cover_image: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="URL of the cover image"
    )

    total_pages: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Number of pages in the book"
    )

    publication_year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of first publication"
    )

    rating: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        index=True,
        nullable=False,
        comment="Catalog rating (0-5)"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    genres: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary=book_genres,
        back_populates="books",
    )

    # Reviews keep their submission order
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        cascade="all, delete-orphan",
        order_by="Review.id",
    )

    shelf_entries: Mapped[list["ShelfEntry"]] = relationship(
        "ShelfEntry",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    @property
    def genre_names(self) -> list[str]:
        return [genre.name for genre in self.genres]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
