"""
Security Service

Handles password hashing and session token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. Signed JWT session tokens carrying {id, email, role}
3. Fixed token lifetime (one day by default)

Usage:
    from bookworm.services.security import hash_password, verify_password

    hashed = hash_password("SecurePass123")
    is_valid = verify_password("SecurePass123", hashed)
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookworm.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# - schemes: bcrypt salts every hash, so equal passwords hash differently
# - deprecated: "auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("SecurePass123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.

    Args:
        plain_password: The password to verify
        hashed_password: The stored bcrypt hash

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Session Tokens
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


@dataclass(frozen=True)
class Identity:
    """
    The caller identity carried by a session token.

    Handlers get this from the authentication gate instead of a User row:
    the token alone decides who is calling and with which role.
    """

    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def create_access_token(user, expires_delta: timedelta | None = None) -> str:
    """
    Issue a signed session token for a user.

    Args:
        user: Any object with id, email and role attributes (usually a User)
        expires_delta: Optional custom lifetime (defaults to the configured days)

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token(user)
        >>> token.count(".") == 2  # JWT format: header.payload.signature
        True
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.access_token_expire_days)

    to_encode = {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(UTC) + expires_delta,
    }

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Signature and expiry are checked by python-jose.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def decode_access_token(token: str) -> Identity | None:
    """
    Decode a session token into the caller identity.

    Returns:
        Identity if the token is valid and carries every claim, None otherwise
    """
    payload = decode_token(token)
    if payload is None:
        return None

    try:
        return Identity(
            id=int(payload["id"]),
            email=str(payload["email"]),
            role=str(payload["role"]),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Token is missing identity claims")
        return None
