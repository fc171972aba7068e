"""
Statistics Pydantic Schemas

Read-only aggregate views for the admin dashboard.
"""

from pydantic import BaseModel, Field


class GenreStat(BaseModel):
    """How many books carry a genre."""

    genre: str = Field(..., examples=["Fantasy"])
    count: int = Field(..., ge=0, examples=[12])


class RegistrationStat(BaseModel):
    """How many users registered on a calendar day."""

    date: str = Field(..., description="Day as YYYY-MM-DD", examples=["2024-03-01"])
    count: int = Field(..., ge=0, examples=[3])
