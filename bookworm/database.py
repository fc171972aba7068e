"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the BookWorm API.

PostgreSQL is the deployment target; SQLite works for local development and
is what the test suite runs against.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookworm.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# The engine owns the connection pool and is the only process-wide database
# state. Handlers never touch it directly; they receive a Session from get_db.
#
# Key parameters:
# - pool_size / max_overflow: connection pool sizing (server databases only)
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements in debug mode

def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite does not take pool sizing arguments and needs
    check_same_thread disabled because FastAPI runs sync handlers
    in a threadpool.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    return create_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


engine = build_engine(settings.database_url)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models inherit from this class:

        class Book(Base):
            __tablename__ = "books"
            ...

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route uses it, and the
    finally block closes it even if the handler raised.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: DbSession):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def check_connection() -> bool:
    """
    Ping the database with a trivial query.

    Used by the startup hook and the health endpoint.

    Returns:
        True if the database answered, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database ping failed: {e}")
        return False


def dispose_engine() -> None:
    """Close every pooled connection. Called on application shutdown."""
    engine.dispose()


def create_tables() -> None:
    """
    Create all database tables.

    Useful for development and tests. In production, use Alembic
    migrations instead: this function doesn't track schema changes.
    """
    # Importing the package registers every model with Base.metadata
    import bookworm.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Development and tests only.
    """
    import bookworm.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
