"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- auth.py: /user/signup, /user/login, /user/me
- users.py: /users, /user/role/{user_id}
- genres.py: /genres/* endpoints
- books.py: /books/* endpoints
- reviews.py: review submission and moderation (/books/review/*, /reviews/*)
- shelves.py: /shelf/*, /want-to-read, /currently-reading, /read
- stats.py: /genre-stats, /user-register-stats, /shelf-book-count

Each router is imported and registered in main.py.
"""

from bookworm.routers.auth import router as auth_router
from bookworm.routers.books import router as books_router
from bookworm.routers.genres import router as genres_router
from bookworm.routers.reviews import router as reviews_router
from bookworm.routers.shelves import router as shelves_router
from bookworm.routers.stats import router as stats_router
from bookworm.routers.users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "genres_router",
    "books_router",
    "reviews_router",
    "shelves_router",
    "stats_router",
]
