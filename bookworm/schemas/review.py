"""
Review Pydantic Schemas

Schemas for submitting, listing and moderating reviews.

Reviews have no public identifier: moderation addresses a review by the
(book_id, email, date) triple, so ReviewApproval carries exactly those.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookworm.models.review import ReviewStatus


class ReviewCreate(BaseModel):
    """
    Schema for submitting a review.

    The reviewer email always comes from the session token. Name and date
    may be supplied by the client; the server fills them in otherwise.
    """

    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )

    comment: str | None = Field(
        default=None,
        max_length=5000,
        description="Review text",
        examples=["Loved the world-building."],
    )

    name: str | None = Field(
        default=None,
        max_length=255,
        description="Display name shown next to the review",
        examples=["Jane Reader"],
    )

    date: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="Submission timestamp (defaults to now, ISO-8601 UTC)",
        examples=["2024-03-01T12:00:00+00:00"],
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip() or None


class ReviewResponse(BaseModel):
    """A review as embedded in a book."""

    rating: int = Field(..., description="Rating from 1 to 5")
    comment: str | None = Field(default=None, description="Review text")
    name: str = Field(..., description="Reviewer display name")
    email: str = Field(..., description="Reviewer email")
    date: str = Field(..., description="Submission timestamp")
    status: ReviewStatus = Field(..., description="Moderation status")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "rating": 5,
                "comment": "Loved the world-building.",
                "name": "Jane Reader",
                "email": "jane@example.com",
                "date": "2024-03-01T12:00:00+00:00",
                "status": "pending",
            }
        },
    )


class ReviewSubmitted(BaseModel):
    """Response for a submitted review."""

    book_id: int
    review: ReviewResponse


class PendingReviewResponse(ReviewResponse):
    """A pending review flattened out of its book for the moderation queue."""

    book_id: int = Field(..., description="Book the review belongs to")
    book_title: str = Field(..., description="Title of that book")


class ReviewApproval(BaseModel):
    """Identifies the review to approve."""

    book_id: int = Field(..., ge=1, description="Book the review belongs to")
    email: str = Field(..., min_length=1, description="Reviewer email")
    date: str = Field(..., min_length=1, description="Exact submission timestamp")


class ApprovalResult(BaseModel):
    """
    Outcome of an approval.

    A request that matches nothing is not an error: both counts are zero.
    """

    matched_count: int = Field(..., ge=0)
    modified_count: int = Field(..., ge=0)
