#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with an admin account and a sample catalog.

USAGE:
    # From the project root with the venv activated
    python scripts/seed_data.py
    python scripts/seed_data.py --admin-email me@bookworm.app --admin-password s3cret!
    python scripts/seed_data.py --keep-existing

This script:
1. Creates tables if they don't exist
2. Clears existing catalog data (unless --keep-existing)
3. Creates the admin account, or promotes it if the email is registered
4. Creates sample genres and books

The admin account is the only way to bootstrap administration: signup
always creates plain users, and only an admin can change roles.
"""

import argparse
import secrets
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from bookworm.database import SessionLocal, create_tables
from bookworm.models import Book, Genre, Review, Role, ShelfEntry, User, book_genres
from bookworm.services.security import hash_password

DEFAULT_ADMIN_EMAIL = "admin@bookworm.app"


def clear_data(db: Session) -> None:
    """Clear catalog, reviews and shelves. Accounts are kept."""
    print("Clearing existing data...")
    db.execute(delete(ShelfEntry))
    db.execute(delete(Review))
    db.execute(delete(book_genres))
    db.execute(delete(Book))
    db.execute(delete(Genre))
    db.commit()
    print("Data cleared.")


def ensure_admin(
    db: Session,
    email: str,
    password: str | None = None,
) -> tuple[User, str | None]:
    """
    Create the admin account, or promote an existing account to admin.

    A new account without a given password gets a random one, which is
    returned (and printed once) so it can be handed to the administrator.
    Returns the admin and the generated password, or None if none was made.
    """
    generated = None
    user = db.execute(
        select(User).where(func.lower(User.email) == email.lower())
    ).scalars().first()

    if user is None:
        if password is None:
            password = generated = secrets.token_urlsafe(16)
        user = User(
            name="Administrator",
            email=email,
            hashed_password=hash_password(password),
            role=Role.ADMIN.value,
        )
        db.add(user)
        print(f"Created admin account {email}.")
        if generated is not None:
            print(f"Generated admin password: {generated}")
    elif not user.is_admin:
        user.role = Role.ADMIN.value
        print(f"Promoted {email} to admin.")
    else:
        print(f"Admin account {email} already exists.")

    db.commit()
    db.refresh(user)
    return user, generated


def create_genres(db: Session) -> dict[str, Genre]:
    """Create sample genres."""
    print("Creating genres...")
    genres_data = [
        {
            "name": "Science Fiction",
            "description": "Fiction based on imagined future scientific or technological advances.",
        },
        {
            "name": "Fantasy",
            "description": "Fiction with supernatural or magical elements.",
        },
        {
            "name": "Mystery",
            "description": "Fiction dealing with the solution of a crime or puzzle.",
        },
        {
            "name": "Classic Literature",
            "description": "Timeless works of literary fiction.",
        },
        {
            "name": "Dystopian",
            "description": "Fiction depicting a dark, oppressive future society.",
        },
        {
            "name": "Romance",
            "description": "Fiction focused on romantic relationships.",
        },
    ]

    genres = {}
    for data in genres_data:
        genre = Genre(**data)
        db.add(genre)
        genres[data["name"]] = genre

    db.commit()
    for genre in genres.values():
        db.refresh(genre)

    print(f"Created {len(genres)} genres.")
    return genres


def create_books(db: Session, genres: dict[str, Genre]) -> list[Book]:
    """Create sample books with their genres."""
    print("Creating books...")

    books_data = [
        {
            "title": "1984",
            "author": "George Orwell",
            "description": "A dystopian novel set in a totalitarian society under constant surveillance.",
            "publication_year": 1949,
            "total_pages": 328,
            "rating": 4.6,
            "genres": ["Science Fiction", "Dystopian", "Classic Literature"],
        },
        {
            "title": "Animal Farm",
            "author": "George Orwell",
            "description": "An allegorical novella reflecting events leading up to the Russian Revolution.",
            "publication_year": 1945,
            "total_pages": 112,
            "rating": 4.4,
            "genres": ["Classic Literature"],
        },
        {
            "title": "Pride and Prejudice",
            "author": "Jane Austen",
            "description": "A romantic novel following the emotional development of Elizabeth Bennet.",
            "publication_year": 1813,
            "total_pages": 432,
            "rating": 4.5,
            "genres": ["Romance", "Classic Literature"],
        },
        {
            "title": "Murder on the Orient Express",
            "author": "Agatha Christie",
            "description": "Hercule Poirot investigates a murder on a train stuck in a snowdrift.",
            "publication_year": 1934,
            "total_pages": 256,
            "rating": 4.2,
            "genres": ["Mystery", "Classic Literature"],
        },
        {
            "title": "Foundation",
            "author": "Isaac Asimov",
            "description": "The first novel in the Foundation series about the fall of the Galactic Empire.",
            "publication_year": 1951,
            "total_pages": 244,
            "rating": 4.3,
            "genres": ["Science Fiction"],
        },
        {
            "title": "The Hobbit",
            "author": "J.R.R. Tolkien",
            "description": "Bilbo Baggins embarks on a quest to reclaim the Lonely Mountain.",
            "publication_year": 1937,
            "total_pages": 310,
            "rating": 4.7,
            "genres": ["Fantasy", "Classic Literature"],
        },
    ]

    books = []
    for data in books_data:
        genre_names = data.pop("genres")

        book = Book(**data)
        book.genres = [genres[name] for name in genre_names]

        db.add(book)
        books.append(book)

    db.commit()
    for book in books:
        db.refresh(book)

    print(f"Created {len(books)} books.")
    return books


def seed_database(
    admin_email: str = DEFAULT_ADMIN_EMAIL,
    admin_password: str | None = None,
    clear_existing: bool = True,
) -> None:
    """
    Main function to seed the database.

    Args:
        admin_email: Email of the admin account to create or promote
        admin_password: Password for a newly created admin account;
            a random one is generated and printed when omitted
        clear_existing: If True, clears existing catalog data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        ensure_admin(db, admin_email, admin_password)
        genres = create_genres(db)
        books = create_books(db, genres)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Admin: {admin_email}")
        print(f"  - Genres: {len(genres)}")
        print(f"  - Books: {len(books)}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the BookWorm database.")
    parser.add_argument("--admin-email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument(
        "--admin-password",
        default=None,
        help="Password for a new admin account (random and printed if omitted)",
    )
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Don't clear existing genres, books, reviews and shelves",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    seed_database(
        admin_email=args.admin_email,
        admin_password=args.admin_password,
        clear_existing=not args.keep_existing,
    )
