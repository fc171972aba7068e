"""
Book Pydantic Schemas

Handles:
- Genre membership expressed as genre names
- Rating bounds
- Pagination for list responses
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookworm.schemas.review import ReviewResponse


class RatingSort(str, Enum):
    """Sort direction for the rating column."""
    ASC = "asc"
    DESC = "desc"


def _normalize_genre_names(v: list[str] | None) -> list[str] | None:
    """Strip names and drop duplicates while keeping order."""
    if v is None:
        return v
    seen: dict[str, None] = {}
    for name in v:
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("Genre names cannot be empty")
        seen.setdefault(cleaned, None)
    return list(seen)


class BookBase(BaseModel):
    """
    Base schema with shared book fields.

    Contains validation for:
    - Rating (0-5)
    - Page count (must be positive)
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["The Hobbit", "Dune"],
    )

    author: str | None = Field(
        default=None,
        max_length=255,
        description="Author name",
        examples=["J.R.R. Tolkien"],
    )

    description: str | None = Field(
        default=None,
        max_length=5000,
        description="Book description or summary",
    )

    cover_image: str | None = Field(
        default=None,
        max_length=2000,
        description="URL of the cover image",
    )

    total_pages: int | None = Field(
        default=None,
        gt=0,
        le=50000,
        description="Number of pages",
        examples=[310],
    )

    publication_year: int | None = Field(
        default=None,
        ge=0,
        le=9999,
        description="Year of first publication",
        examples=[1937],
    )

    rating: float = Field(
        default=0.0,
        ge=0,
        le=5,
        description="Catalog rating from 0 to 5",
        examples=[4.7],
    )

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Validate and normalize title."""
        if not v.strip():
            raise ValueError("Title cannot be empty or whitespace")
        return v.strip()


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "rating": 4.7,
        "genres": ["Fantasy", "Adventure"]
    }
    """

    genres: list[str] = Field(
        default=[],
        description="Names of existing genres this book belongs to",
        examples=[["Fantasy", "Adventure"]],
    )

    @field_validator("genres")
    @classmethod
    def normalize_genres(cls, v: list[str]) -> list[str]:
        return _normalize_genre_names(v)


class BookUpdate(BaseModel):
    """
    Schema for updating an existing book.

    All fields are optional; only the fields sent are changed. Fields not
    declared here cannot be written through the API.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    author: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    cover_image: str | None = Field(default=None, max_length=2000)
    total_pages: int | None = Field(default=None, gt=0, le=50000)
    publication_year: int | None = Field(default=None, ge=0, le=9999)
    rating: float | None = Field(default=None, ge=0, le=5)

    genres: list[str] | None = Field(
        default=None,
        description="Genre names (replaces the existing set)",
    )

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str | None) -> str | None:
        """Validate title if provided."""
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty or whitespace")
        return v.strip() if v else v

    @field_validator("genres")
    @classmethod
    def normalize_genres(cls, v: list[str] | None) -> list[str] | None:
        return _normalize_genre_names(v)


class BookResponse(BookBase):
    """
    Schema for book responses.

    Genres are returned by name; reviews are embedded in submission order.
    """

    id: int = Field(..., description="Unique identifier")
    genres: list[str] = Field(default=[], description="Genre names")
    reviews: list[ReviewResponse] = Field(default=[], description="Reviews")
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")

    @field_validator("genres", mode="before")
    @classmethod
    def genres_to_names(cls, v):
        """Accept Genre rows (from the ORM) as well as plain names."""
        return [getattr(genre, "name", genre) for genre in v]

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "The Hobbit",
                "author": "J.R.R. Tolkien",
                "description": "A hobbit is swept into a quest...",
                "cover_image": None,
                "total_pages": 310,
                "publication_year": 1937,
                "rating": 4.7,
                "genres": ["Fantasy"],
                "reviews": [],
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class BookListResponse(BaseModel):
    """
    Schema for paginated book list responses.

    - result: Books on this page
    - total: Total number of books matching the filters
    - page: Current page number
    - limit: Number of items per page
    - total_page: ceil(total / limit)
    """

    result: list[BookResponse] = Field(..., description="Books on this page")
    total: int = Field(..., ge=0, description="Total number of matching books")
    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, le=100, description="Items per page")
    total_page: int = Field(..., ge=0, description="Total number of pages")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "result": [],
                "total": 42,
                "page": 1,
                "limit": 10,
                "total_page": 5,
            }
        },
    )
