"""
Users Router

Admin user management.

Endpoints:
- GET /users - List every account
- PATCH /user/role/{user_id} - Change an account's role

Business Rules:
- Both endpoints require an admin token
- Password hashes are never returned
- Accounts are never deleted through the API
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import select

from bookworm.config import get_settings
from bookworm.dependencies import AdminIdentity, DbSession
from bookworm.models.user import User
from bookworm.schemas.user import RoleUpdate, UserResponse
from bookworm.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    tags=["Users"],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Admin role required"},
    },
)


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List users",
    description="List every registered account. Admin only.",
)
@limiter.limit(settings.rate_limit_default)
def list_users(
    request: Request,
    db: DbSession,
    identity: AdminIdentity,
) -> List[UserResponse]:
    """List all users, oldest account first."""
    stmt = select(User).order_by(User.id)
    users = db.execute(stmt).scalars().all()
    return [UserResponse.model_validate(u) for u in users]


@router.patch(
    "/user/role/{user_id}",
    response_model=UserResponse,
    summary="Change a user's role",
    description="Set an account's role to 'user' or 'admin'. Admin only.",
    responses={404: {"description": "User not found"}},
)
@limiter.limit(settings.rate_limit_write)
def change_user_role(
    request: Request,
    user_id: int,
    role_data: RoleUpdate,
    db: DbSession,
    identity: AdminIdentity,
) -> UserResponse:
    """
    Change a user's role.

    Only values of the Role enum are accepted; anything else is rejected
    by validation before reaching the database.
    """
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with id {user_id} not found",
        )

    user.role = role_data.role.value
    db.commit()
    db.refresh(user)

    logger.info(f"{identity.email} set role of {user.email} to {user.role}")

    return UserResponse.model_validate(user)
