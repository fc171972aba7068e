"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Common Dependency Patterns used here:
- Database sessions (per-request)
- Pagination parameters
- Authentication and authorization gates
- "Get or 404" lookups shared by several routers

Access Control
==============
Every protected route declares an ordered list of gates:

    authenticate            -> valid bearer token required (401 otherwise)
    require(ADMIN)          -> authenticate, then role must be admin (403)
    require(OWNER_OR_ADMIN) -> authenticate, then ?email= must be the caller's

A Gate is a predicate over (identity, request) plus the status and message
returned when it fails. require() runs them in order and stops at the first
failure, so a route's policy is the list of gates it names.
"""

import logging
from collections.abc import Callable
from typing import Annotated, NamedTuple

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bookworm.config import get_settings
from bookworm.database import get_db
from bookworm.models import Book
from bookworm.services.security import Identity, decode_access_token

logger = logging.getLogger(__name__)

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PaginationParams:
    """
    Common pagination parameters for list endpoints.

    - page: Which page to return (1-indexed)
    - limit: How many items per page
    - skip: Calculated offset for database query

    Usage in route:
        @router.get("/books")
        def list_books(db: DbSession, pagination: Pagination):
            stmt = stmt.offset(pagination.skip).limit(pagination.limit)
    """

    def __init__(
        self,
        page: int = Query(
            default=1,
            ge=1,
            description="Page number (1-indexed)",
            examples=[1, 2, 3],
        ),
        limit: int = Query(
            default=10,
            ge=1,
            le=100,
            description="Number of items per page (max 100)",
            examples=[10, 25, 50],
        ),
    ) -> None:
        self.page = page
        self.limit = limit

    @property
    def skip(self) -> int:
        """
        Number of records to skip.

        Page 1 → skip 0, page 2 → skip limit, and so on.
        """
        return (self.page - 1) * self.limit


Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# Gate A: Authentication
# =============================================================================
# auto_error=False so a missing header reaches our handler and gets the same
# {"message": ...} body as every other 401.
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """
    Require a valid bearer token.

    On success the decoded identity is returned and also attached to
    request.state.identity for anything further down the request.

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = decode_access_token(credentials.credentials)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.identity = identity
    return identity


# =============================================================================
# Gate B and friends: Authorization predicates
# =============================================================================
class Gate(NamedTuple):
    """A named authorization check and the error it produces."""

    name: str
    check: Callable[[Identity, Request], bool]
    status_code: int = status.HTTP_403_FORBIDDEN
    detail: str = "Forbidden"


def _is_admin(identity: Identity, request: Request) -> bool:
    return identity.is_admin


def _owns_queried_email(identity: Identity, request: Request) -> bool:
    email = request.query_params.get("email")
    return identity.is_admin or (
        email is not None and email.lower() == identity.email.lower()
    )


ADMIN = Gate(name="admin", check=_is_admin)
OWNER_OR_ADMIN = Gate(name="owner-or-admin", check=_owns_queried_email)


def require(*gates: Gate) -> Callable[..., Identity]:
    """
    Build a dependency that authenticates and then applies gates in order.

    Usage:
        @router.get("/users")
        def list_users(identity: Identity = Depends(require(ADMIN))):
            ...
    """

    def dependency(
        request: Request,
        identity: Identity = Depends(authenticate),
    ) -> Identity:
        for gate in gates:
            if not gate.check(identity, request):
                logger.warning(
                    f"Gate '{gate.name}' denied {identity.email} "
                    f"on {request.method} {request.url.path}"
                )
                raise HTTPException(
                    status_code=gate.status_code,
                    detail=gate.detail,
                )
        return identity

    return dependency


def genre_list_access(
    request: Request,
    identity: Identity = Depends(authenticate),
) -> Identity:
    """
    Gate for listing genres.

    Any signed-in user may list genres unless GENRE_LIST_ADMIN_ONLY is set,
    in which case the admin gate applies as well. Read per request so the
    flag can be flipped without rebuilding the router.
    """
    if get_settings().genre_list_admin_only:
        return require(ADMIN)(request, identity)
    return identity


# Type aliases for cleaner route signatures
AuthIdentity = Annotated[Identity, Depends(authenticate)]
AdminIdentity = Annotated[Identity, Depends(require(ADMIN))]
OwnerIdentity = Annotated[Identity, Depends(require(OWNER_OR_ADMIN))]
GenreReader = Annotated[Identity, Depends(genre_list_access)]


# =============================================================================
# Shared Helper Functions
# =============================================================================
def get_book_or_404(db: Session, book_id: int) -> Book:
    """
    Get a book by ID with genres and reviews loaded, or raise 404.

    Uses selectinload to eagerly load relationships,
    preventing N+1 query problems.
    """
    stmt = (
        select(Book)
        .options(selectinload(Book.genres), selectinload(Book.reviews))
        .where(Book.id == book_id)
    )
    book = db.execute(stmt).scalar_one_or_none()

    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {book_id} not found",
        )

    return book
