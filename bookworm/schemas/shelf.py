"""
Shelf Pydantic Schemas

Schemas for the three reading shelves.

Adding to a shelf always answers with ShelfAddResult, whether or not the
book was already there, so clients branch on `added` instead of on the
shape of the body.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from bookworm.models.shelf import ShelfName
from bookworm.schemas.book import BookResponse

ALREADY_IN_SHELF = "already in shelf"


class ShelfEntryCreate(BaseModel):
    """Body for adding a book to one of the caller's shelves."""

    book_id: int = Field(..., ge=1, description="Book to put on the shelf")


class ShelfEntryResponse(BaseModel):
    """A single shelf entry."""

    id: int
    shelf: ShelfName
    email: str
    book_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShelfBookResponse(ShelfEntryResponse):
    """A shelf entry joined with the book it refers to."""

    book: BookResponse


class ShelfAddResult(BaseModel):
    """
    Outcome of adding a book to a shelf.

    - added=True: entry holds the new row
    - added=False: reason explains why nothing was inserted
    """

    added: bool
    reason: str | None = None
    entry: ShelfEntryResponse | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "added": False,
                "reason": ALREADY_IN_SHELF,
                "entry": None,
            }
        },
    )


class ShelfCount(BaseModel):
    """Number of books on one named shelf."""

    name: str = Field(..., examples=["Currently Reading"])
    count: int = Field(..., ge=0)
