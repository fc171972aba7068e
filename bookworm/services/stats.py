"""
Statistics Service

Read-only aggregates for the admin dashboard.
"""

from collections import Counter
from datetime import UTC, tzinfo

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookworm.models import Genre, User, book_genres
from bookworm.schemas.stats import GenreStat, RegistrationStat


def genre_stats(db: Session) -> list[GenreStat]:
    """
    Count books per genre.

    A book is counted once for each genre it has. Genres without books are
    left out. Sorted by count descending, ties broken by genre name.
    """
    book_count = func.count(book_genres.c.book_id).label("count")
    stmt = (
        select(Genre.name, book_count)
        .join(book_genres, book_genres.c.genre_id == Genre.id)
        .group_by(Genre.name)
        .order_by(book_count.desc(), Genre.name)
    )

    return [
        GenreStat(genre=name, count=count)
        for name, count in db.execute(stmt).all()
    ]


def registration_trend(db: Session, zone: tzinfo) -> list[RegistrationStat]:
    """
    Count registrations per calendar day.

    Days are taken in the given timezone rather than the database's, so
    the trend reads the same on PostgreSQL and SQLite. Timestamps stored
    without a zone are UTC.

    Returns:
        One entry per day with at least one signup, oldest day first
    """
    per_day: Counter[str] = Counter()
    for created_at in db.execute(select(User.created_at)).scalars():
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        per_day[created_at.astimezone(zone).date().isoformat()] += 1

    return [
        RegistrationStat(date=day, count=count)
        for day, count in sorted(per_day.items())
    ]
