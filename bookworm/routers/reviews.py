"""
Reviews Router

Endpoints for submitting and moderating book reviews.

Endpoints:
- PATCH /books/review/{book_id} - Submit a review (any signed-in user)
- GET /books/{book_id}/reviews - List a book's reviews, optionally by status
- GET /books/reviews - Moderation queue of pending reviews (admin)
- PATCH /reviews/approve - Approve one review (admin)

Business Rules:
- New reviews are "pending"; approval is the only transition
- The same reader may review a book more than once
- Approval addresses a review by (book_id, email, date); a triple that
  matches nothing returns zero counts, not an error
"""

import logging
from typing import List

from fastapi import APIRouter, Query, Request, status
from sqlalchemy import select

from bookworm.config import get_settings
from bookworm.dependencies import (
    AdminIdentity,
    AuthIdentity,
    DbSession,
    get_book_or_404,
)
from bookworm.models import Review, ReviewStatus
from bookworm.schemas import (
    ApprovalResult,
    PendingReviewResponse,
    ReviewApproval,
    ReviewCreate,
    ReviewResponse,
    ReviewSubmitted,
)
from bookworm.services import moderation
from bookworm.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    tags=["Reviews"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Moderation Queue (must come before /books/{book_id} for route matching)
# =============================================================================
@router.get(
    "/books/reviews",
    response_model=List[PendingReviewResponse],
    summary="List pending reviews",
    description="Every pending review across all books, for moderation. Admin only.",
)
@limiter.limit(settings.rate_limit_default)
def list_pending_reviews(
    request: Request,
    db: DbSession,
    identity: AdminIdentity,
) -> List[PendingReviewResponse]:
    """List all pending reviews, grouped by book in submission order."""
    return moderation.list_pending_reviews(db)


@router.patch(
    "/reviews/approve",
    response_model=ApprovalResult,
    summary="Approve a review",
    description="""
    Approve the review identified by book, reviewer email and exact date.

    Always answers 200. Check `modified_count`: 0 means no pending review
    matched.
    """,
)
@limiter.limit(settings.rate_limit_write)
def approve_review(
    request: Request,
    approval: ReviewApproval,
    db: DbSession,
    identity: AdminIdentity,
) -> ApprovalResult:
    """Approve a pending review."""
    result = moderation.approve_review(
        db,
        book_id=approval.book_id,
        email=approval.email,
        date=approval.date,
    )
    logger.info(
        f"{identity.email} approval of ({approval.book_id}, {approval.email}, "
        f"{approval.date}): {result.modified_count} modified"
    )
    return result


# =============================================================================
# Book Review Endpoints
# =============================================================================
@router.patch(
    "/books/review/{book_id}",
    response_model=ReviewSubmitted,
    status_code=status.HTTP_200_OK,
    summary="Submit a review",
    description="Add a review to a book. It stays pending until an admin approves it.",
)
@limiter.limit(settings.rate_limit_write)
def submit_review(
    request: Request,
    book_id: int,
    review_data: ReviewCreate,
    db: DbSession,
    identity: AuthIdentity,
) -> ReviewSubmitted:
    """
    Append a review to a book.

    Raises:
        HTTPException: 404 if book not found
    """
    book = get_book_or_404(db, book_id)
    review = moderation.submit_review(db, book, identity, review_data)

    return ReviewSubmitted(
        book_id=book_id,
        review=ReviewResponse.model_validate(review),
    )


@router.get(
    "/books/{book_id}/reviews",
    response_model=List[ReviewResponse],
    summary="List reviews for a book",
    description="A book's reviews in submission order, optionally filtered by status.",
)
@limiter.limit(settings.rate_limit_default)
def list_book_reviews(
    request: Request,
    book_id: int,
    db: DbSession,
    identity: AuthIdentity,
    review_status: ReviewStatus | None = Query(
        default=None,
        alias="status",
        description="Only reviews with this status",
    ),
) -> List[ReviewResponse]:
    """List a book's reviews."""
    get_book_or_404(db, book_id)

    stmt = select(Review).where(Review.book_id == book_id).order_by(Review.id)
    if review_status is not None:
        stmt = stmt.where(Review.status == review_status.value)

    reviews = db.execute(stmt).scalars().all()
    return [ReviewResponse.model_validate(r) for r in reviews]
