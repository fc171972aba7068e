"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Different rules for create vs update vs response
3. Integrity: Update schemas name every writable field, so clients
   cannot set columns the API doesn't mean to expose

Schema Naming Convention:
- XxxBase: Shared fields between create/update
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed when updating (all optional)
- XxxResponse: Fields returned in API responses
"""

from bookworm.schemas.book import (
    BookBase,
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
    RatingSort,
)
from bookworm.schemas.genre import (
    GenreCreate,
    GenreResponse,
    GenreUpdate,
)
from bookworm.schemas.review import (
    ApprovalResult,
    PendingReviewResponse,
    ReviewApproval,
    ReviewCreate,
    ReviewResponse,
    ReviewSubmitted,
)
from bookworm.schemas.shelf import (
    ShelfAddResult,
    ShelfBookResponse,
    ShelfCount,
    ShelfEntryCreate,
    ShelfEntryResponse,
)
from bookworm.schemas.stats import GenreStat, RegistrationStat
from bookworm.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RoleUpdate,
    UserCreate,
    UserResponse,
)

__all__ = [
    # Genre schemas
    "GenreCreate",
    "GenreUpdate",
    "GenreResponse",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookListResponse",
    "RatingSort",
    # User schemas
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "AuthResponse",
    "CurrentUserResponse",
    "RoleUpdate",
    # Review schemas
    "ReviewCreate",
    "ReviewResponse",
    "ReviewSubmitted",
    "PendingReviewResponse",
    "ReviewApproval",
    "ApprovalResult",
    # Shelf schemas
    "ShelfEntryCreate",
    "ShelfEntryResponse",
    "ShelfBookResponse",
    "ShelfAddResult",
    "ShelfCount",
    # Statistics schemas
    "GenreStat",
    "RegistrationStat",
]
