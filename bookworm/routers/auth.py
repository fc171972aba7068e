"""
Authentication Router

Handles account endpoints under /user:
- Signup (email/password → account + token)
- Login (email/password → token)
- Get current user (from token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Tokens carry {id, email, role} and expire after one day
- Login answers unknown emails and wrong passwords identically
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from bookworm.config import get_settings
from bookworm.dependencies import AuthIdentity, DbSession
from bookworm.models.user import Role, User
from bookworm.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    UserCreate,
    UserResponse,
)
from bookworm.services.rate_limiter import limiter
from bookworm.services.security import (
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/user",
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
    },
)

INVALID_CREDENTIALS = "Invalid user credentials"
USER_EXISTS = "User already exist"


def _email_matches(email: str):
    # EmailStr lowercases only the domain, so compare whole addresses without case
    return func.lower(User.email) == email.strip().lower()


# -------------------------------------------------------------------------
# Signup Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="""
    Create a new reader account and sign it in.

    Every new account gets the **user** role. The response carries a
    bearer token valid for one day.
    """,
)
@limiter.limit(settings.rate_limit_signup)
def signup(
    request: Request,
    db: DbSession,
    user_data: UserCreate | None = None,
) -> AuthResponse:
    """
    Register a new user.

    1. Rejects a missing body
    2. Rejects an email that is already registered
    3. Hashes the password and stores the user as role "user"
    4. Returns a token and the user (without password)
    """
    if user_data is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User data is required",
        )

    stmt = select(User).where(_email_matches(user_data.email))
    if db.execute(stmt).scalars().first() is not None:
        logger.info(f"Signup rejected, email already registered: {user_data.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=USER_EXISTS,
        )

    user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
        photo_url=user_data.photo_url,
        role=Role.USER.value,
    )

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        logger.info(f"Concurrent signup lost for {user_data.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=USER_EXISTS,
        )

    logger.info(f"New user registered: {user.email}")

    return AuthResponse(
        message="Signup successful",
        token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a bearer token.

    **Usage:**
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_login)
def login(
    request: Request,
    db: DbSession,
    credentials: LoginRequest | None = None,
) -> AuthResponse:
    """
    Authenticate a user and return a token.

    Missing credentials, an unknown email and a wrong password are all
    401s; the last two share one message so the response never reveals
    whether an email is registered.
    """
    if credentials is None or not credentials.email or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User data is required",
        )

    stmt = select(User).where(_email_matches(credentials.email))
    user = db.execute(stmt).scalars().first()

    if user is None:
        logger.warning(f"Login failed: user not found for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    if not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Login failed: incorrect password for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    logger.info(f"User logged in: {user.email}")

    return AuthResponse(
        message="Login successful",
        token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


# -------------------------------------------------------------------------
# Current User Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
    description="Get the signed-in user's account. Requires a bearer token.",
)
@limiter.limit(settings.rate_limit_default)
def get_me(
    request: Request,
    db: DbSession,
    identity: AuthIdentity,
) -> CurrentUserResponse:
    """
    Return the caller's own account, looked up by the id in the token.

    A valid token for an account that no longer exists yields
    {"user": null} rather than an error.
    """
    user = db.get(User, identity.id)
    return CurrentUserResponse(
        user=UserResponse.model_validate(user) if user is not None else None
    )
