"""
Review Moderation Service

Reviews move through a single transition:

    pending --(admin approves)--> approved

There is no way back and no deletion. A review is addressed by the
(book_id, email, date) triple. Approval is a conditional UPDATE of the
earliest pending review with that triple, so it never races with itself.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from bookworm.models import Book, Review, ReviewStatus, User
from bookworm.schemas.review import (
    ApprovalResult,
    PendingReviewResponse,
    ReviewCreate,
)
from bookworm.services.security import Identity

logger = logging.getLogger(__name__)


def _default_reviewer_name(db: Session, identity: Identity) -> str:
    user = db.get(User, identity.id)
    if user is not None and user.name:
        return user.name
    return identity.email.split("@")[0]


def submit_review(
    db: Session,
    book: Book,
    identity: Identity,
    review_data: ReviewCreate,
) -> Review:
    """
    Append a pending review to a book.

    The same reader may review the same book any number of times.

    Args:
        db: Database session
        book: Book being reviewed
        identity: The reviewer (email is always taken from here)
        review_data: Rating, comment and optional name/date

    Returns:
        The stored review
    """
    review = Review(
        book_id=book.id,
        rating=review_data.rating,
        comment=review_data.comment,
        name=review_data.name or _default_reviewer_name(db, identity),
        email=identity.email,
        date=review_data.date or datetime.now(UTC).isoformat(),
        status=ReviewStatus.PENDING.value,
    )

    db.add(review)
    db.commit()
    db.refresh(review)

    logger.info(f"Review submitted for book {book.id} by {identity.email}")

    return review


def list_pending_reviews(db: Session) -> list[PendingReviewResponse]:
    """
    Flatten every book's pending reviews into one list.

    Ordered by book, then submission order within the book.
    """
    stmt = (
        select(Review, Book.title)
        .join(Book, Book.id == Review.book_id)
        .where(Review.status == ReviewStatus.PENDING.value)
        .order_by(Review.book_id, Review.id)
    )

    return [
        PendingReviewResponse(
            book_id=review.book_id,
            book_title=title,
            rating=review.rating,
            comment=review.comment,
            name=review.name,
            email=review.email,
            date=review.date,
            status=review.status,
        )
        for review, title in db.execute(stmt).all()
    ]


def approve_review(
    db: Session,
    book_id: int,
    email: str,
    date: str,
) -> ApprovalResult:
    """
    Approve the review identified by (book_id, email, date).

    Matching is exact on all three values. A reader may leave several
    reviews with the same triple; one call approves only the earliest
    pending one, so both counts are 0 or 1. A triple that matches nothing
    is not an error: the result reports zero matched and zero modified,
    and the store is left untouched. Approving an already approved review
    matches it but modifies nothing.
    """
    key = (
        Review.book_id == book_id,
        Review.email == email,
        Review.date == date,
    )

    matched = db.execute(select(Review.id).where(*key).limit(1)).first() is not None

    target_id = db.execute(
        select(func.min(Review.id)).where(
            *key, Review.status == ReviewStatus.PENDING.value
        )
    ).scalar()

    modified = 0
    if target_id is not None:
        result = db.execute(
            update(Review)
            .where(
                Review.id == target_id,
                Review.status == ReviewStatus.PENDING.value,
            )
            .values(status=ReviewStatus.APPROVED.value)
        )
        db.commit()
        modified = result.rowcount or 0

    if modified:
        logger.info(f"Approved review on book {book_id} by {email} at {date}")
    else:
        logger.info(f"No pending review on book {book_id} by {email} at {date}")

    return ApprovalResult(matched_count=int(matched), modified_count=modified)
