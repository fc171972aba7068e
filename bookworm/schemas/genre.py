"""
Genre Pydantic Schemas

A genre name is what book payloads reference (BookCreate.genres) and what
the genre statistics report, so names are trimmed on the way in: "Fantasy"
and " Fantasy " must not become two genres.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints


def _trimmed_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Genre name cannot be empty or whitespace")
    return value


GenreName = Annotated[
    str,
    StringConstraints(min_length=1, max_length=100),
    AfterValidator(_trimmed_name),
]


class GenreCreate(BaseModel):
    """Body of POST /genres (admin only)."""

    name: GenreName = Field(examples=["Fantasy", "Horror"])
    description: Optional[str] = Field(default=None, max_length=1000)


class GenreUpdate(BaseModel):
    """
    Body of PATCH /genres/{id}.

    Only name and description can change; undeclared fields are dropped.
    Renaming a genre renames it on every tagged book at once, since books
    link to the genre row rather than copying its name.
    """

    name: Optional[GenreName] = None
    description: Optional[str] = Field(default=None, max_length=1000)


class GenreResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 3,
                "name": "Fantasy",
                "description": "Magic, quests and invented worlds",
                "created_at": "2024-02-01T09:00:00Z",
                "updated_at": "2024-02-01T09:00:00Z",
            }
        },
    )
