"""
Review Model

Represents a reader's review of a book, subject to admin moderation.

Business Rules:
- Every review starts "pending"
- The only transition is pending → approved, performed by an admin
- Reviews are identified for moderation by (book_id, email, date);
  there is no client-facing review id
- The same reader may review a book more than once
- Reviews are removed only together with their book
"""

from enum import Enum

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookworm.database import Base


class ReviewStatus(str, Enum):
    """Moderation states of a review."""
    PENDING = "pending"
    APPROVED = "approved"


class Review(Base):
    """
    Review model for book reviews.

    Attributes:
        id: Primary key (internal; keeps submission order)
        book_id: Foreign key to books table
        rating: 1-5 star rating
        comment: Review text
        name: Reviewer display name
        email: Reviewer email (from the submitting account)
        date: Submission timestamp string, matched exactly on approval
        status: "pending" or "approved"
    """

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Rating from 1-5 stars",
    )
    comment: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Review text content",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Reviewer display name",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Reviewer email",
    )
    # Stored verbatim so approval can match the exact value the client saw
    date: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Submission timestamp as sent/returned to clients",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=ReviewStatus.PENDING.value,
        nullable=False,
        index=True,
        comment="Moderation status (pending, approved)",
    )

    book = relationship("Book", back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
        Index("ix_reviews_moderation_key", "book_id", "email", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Review(id={self.id}, book_id={self.book_id}, "
            f"email={self.email!r}, status={self.status!r})>"
        )
