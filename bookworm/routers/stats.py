"""
Statistics Router

Aggregates for the dashboard.

Endpoints:
- GET /genre-stats - Books per genre (admin)
- GET /user-register-stats - Signups per day (admin)
- GET /shelf-book-count?email= - A reader's shelf sizes (owner or admin)
"""

from typing import List

from fastapi import APIRouter, Query, Request

from bookworm.config import get_settings
from bookworm.dependencies import AdminIdentity, DbSession, OwnerIdentity
from bookworm.schemas import GenreStat, RegistrationStat, ShelfCount
from bookworm.services import shelves, stats
from bookworm.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(tags=["Statistics"])


@router.get(
    "/genre-stats",
    response_model=List[GenreStat],
    summary="Books per genre",
    description="Number of books in each genre, most common first. Admin only.",
)
@limiter.limit(settings.rate_limit_default)
def get_genre_stats(
    request: Request,
    db: DbSession,
    identity: AdminIdentity,
) -> List[GenreStat]:
    return stats.genre_stats(db)


@router.get(
    "/user-register-stats",
    response_model=List[RegistrationStat],
    summary="Signups per day",
    description="""
    Number of accounts created on each day, oldest first.

    Days are calendar days in the STATS_TIMEZONE setting. Admin only.
    """,
)
@limiter.limit(settings.rate_limit_default)
def get_registration_stats(
    request: Request,
    db: DbSession,
    identity: AdminIdentity,
) -> List[RegistrationStat]:
    return stats.registration_trend(db, get_settings().stats_zone)


@router.get(
    "/shelf-book-count",
    response_model=List[ShelfCount],
    summary="Books per shelf",
    description="How many books a reader has on each of the three shelves.",
)
@limiter.limit(settings.rate_limit_default)
def get_shelf_book_count(
    request: Request,
    db: DbSession,
    identity: OwnerIdentity,
    email: str = Query(..., description="Shelf owner's email"),
) -> List[ShelfCount]:
    """Always three entries: Currently Reading, Want To Read, Read."""
    return shelves.shelf_counts(db, email)
