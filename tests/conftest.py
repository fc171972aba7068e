"""
pytest Fixtures for BookWorm API Tests

This file contains shared fixtures used across all test files.

WHAT ARE FIXTURES?
==================
Fixtures are reusable test setup/teardown functions.
They provide:
- Test data (accounts, genres, books, reviews, shelf entries)
- Test resources (database, HTTP client)
- Setup/cleanup logic (create/drop tables)

FIXTURE SCOPES:
- function (default): New instance per test function
- session: Single instance for entire test session

Every test gets its own in-memory database, so commits and rollbacks made
by the code under test behave exactly as in production.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting, sets a test secret key and keeps the
# application engine off PostgreSQL
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookworm.database import Base, get_db
from bookworm.main import app
from bookworm.models import Book, Genre, Review, Role, ShelfEntry, ShelfName, User
from bookworm.services.security import create_access_token, hash_password

TEST_PASSWORD = "SecurePass123"

# bcrypt is slow on purpose; hash once for all fixture accounts
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


def get_auth_header(user: User) -> dict:
    """Bearer header carrying a session token for the given user."""
    return {"Authorization": f"Bearer {create_access_token(user)}"}


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="function")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole test.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# ACCOUNT FIXTURES
# =============================================================================
def _create_user(db: Session, name: str, email: str, role: Role = Role.USER) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=TEST_PASSWORD_HASH,
        role=role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """A regular reader account."""
    return _create_user(db_session, "Test Reader", "reader@example.com")


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Another reader, for ownership checks."""
    return _create_user(db_session, "Second Reader", "second@example.com")


@pytest.fixture
def admin_user(db_session: Session) -> User:
    """An administrator account."""
    return _create_user(db_session, "Admin", "admin@example.com", Role.ADMIN)


@pytest.fixture
def user_headers(sample_user: User) -> dict:
    return get_auth_header(sample_user)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return get_auth_header(admin_user)


# =============================================================================
# CATALOG FIXTURES
# =============================================================================
@pytest.fixture
def sample_genre(db_session: Session) -> Genre:
    """Create a sample genre for testing."""
    genre = Genre(
        name="Fantasy",
        description="Fiction with supernatural or magical elements.",
    )
    db_session.add(genre)
    db_session.commit()
    db_session.refresh(genre)
    return genre


@pytest.fixture
def second_genre(db_session: Session) -> Genre:
    genre = Genre(name="Science Fiction")
    db_session.add(genre)
    db_session.commit()
    db_session.refresh(genre)
    return genre


@pytest.fixture
def sample_book(db_session: Session, sample_genre: Genre) -> Book:
    """Create a sample book in the Fantasy genre."""
    book = Book(
        title="The Hobbit",
        author="J.R.R. Tolkien",
        description="Bilbo Baggins embarks on a quest to reclaim the Lonely Mountain.",
        total_pages=310,
        publication_year=1937,
        rating=4.7,
        genres=[sample_genre],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def second_book(db_session: Session, second_genre: Genre) -> Book:
    book = Book(
        title="Foundation",
        author="Isaac Asimov",
        total_pages=244,
        rating=4.3,
        genres=[second_genre],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(
    db_session: Session,
    sample_genre: Genre,
    second_genre: Genre,
) -> list[Book]:
    """
    Create 25 books for pagination testing.

    Ratings run 0.0, 0.2, ... 4.8; every third book is Fantasy, the rest
    Science Fiction.
    """
    books = []
    for i in range(25):
        book = Book(
            title=f"Test Book {i + 1}",
            author="Test Author",
            total_pages=100 + i * 10,
            rating=round(i * 0.2, 1),
        )
        book.genres = [sample_genre] if i % 3 == 0 else [second_genre]
        books.append(book)
        db_session.add(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books


# =============================================================================
# REVIEW AND SHELF FIXTURES
# =============================================================================
@pytest.fixture
def pending_review(db_session: Session, sample_book: Book, sample_user: User) -> Review:
    """A pending review by sample_user on sample_book."""
    review = Review(
        book_id=sample_book.id,
        rating=4,
        comment="A charming adventure.",
        name=sample_user.name,
        email=sample_user.email,
        date="2024-03-01T12:00:00+00:00",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review


@pytest.fixture
def shelf_entries(
    db_session: Session,
    sample_user: User,
    sample_book: Book,
    second_book: Book,
) -> list[ShelfEntry]:
    """
    sample_user has two books currently reading and one want-to-read.
    """
    entries = [
        ShelfEntry(
            shelf=ShelfName.CURRENTLY_READING.value,
            email=sample_user.email,
            book_id=sample_book.id,
        ),
        ShelfEntry(
            shelf=ShelfName.CURRENTLY_READING.value,
            email=sample_user.email,
            book_id=second_book.id,
        ),
        ShelfEntry(
            shelf=ShelfName.WANT_TO_READ.value,
            email=sample_user.email,
            book_id=sample_book.id,
        ),
    ]
    db_session.add_all(entries)
    db_session.commit()
    for entry in entries:
        db_session.refresh(entry)
    return entries
