"""
SQLAlchemy Models Package

This package contains all database models for the BookWorm API.

Model Relationships:
- Genre <-> Book: Many-to-Many through book_genres
- Book -> Review: One-to-Many (reviews belong to their book)
- Book -> ShelfEntry: One-to-Many (entries reference books by id)

Import all models here to:
1. Make them available as: from bookworm.models import Book, Genre, User
2. Ensure Alembic discovers them for migrations
3. Provide a single import point for the application
"""

# The order matters for SQLAlchemy to resolve relationships
from bookworm.models.user import Role, User
from bookworm.models.genre import Genre
from bookworm.models.book import Book, book_genres
from bookworm.models.review import Review, ReviewStatus
from bookworm.models.shelf import ShelfEntry, ShelfName

__all__ = [
    "Role",
    "User",
    "Genre",
    "Book",
    "book_genres",
    "Review",
    "ReviewStatus",
    "ShelfEntry",
    "ShelfName",
]
