"""
User Pydantic Schemas

These schemas define the shape of data for account-related API operations.

Schemas:
- UserCreate: Signup data (name, email, password, photo_url)
- LoginRequest: Login credentials
- UserResponse: Public account data (never exposes the password hash)
- AuthResponse: Token plus account returned by signup and login
- RoleUpdate: The only field an admin may change on an account
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from bookworm.models.user import Role


class UserCreate(BaseModel):
    """
    Schema for signup.

    The role is not accepted here: every new account is a "user".
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name",
        examples=["Jane Reader"],
    )

    email: EmailStr = Field(
        ...,
        description="Email address, used to log in",
        examples=["jane@example.com"],
    )

    password: str = Field(
        ...,
        min_length=6,
        max_length=72,  # bcrypt ignores anything past 72 bytes
        description="Password (6-72 characters)",
        examples=["SecurePass123"],
    )

    photo_url: str | None = Field(
        default=None,
        max_length=2000,
        description="URL to a profile photo",
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class LoginRequest(BaseModel):
    """
    Schema for login.

    Both fields are optional at the schema level so that missing
    credentials produce the same 401 as wrong ones instead of a
    validation error.
    """

    email: str | None = Field(default=None, examples=["jane@example.com"])
    password: str | None = Field(default=None, examples=["SecurePass123"])


class UserResponse(BaseModel):
    """
    Schema for user responses (what the API returns).

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique user identifier", examples=[1, 42])
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    photo_url: str | None = Field(default=None, description="Profile photo URL")
    role: str = Field(..., description="Account role (user, admin)")
    created_at: datetime = Field(..., description="When the user registered")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Jane Reader",
                "email": "jane@example.com",
                "photo_url": None,
                "role": "user",
                "created_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class AuthResponse(BaseModel):
    """Returned by signup and login."""

    message: str = Field(..., examples=["Login successful"])
    token: str = Field(..., description="Bearer token valid for one day")
    user: UserResponse


class CurrentUserResponse(BaseModel):
    """Wrapper for GET /user/me; user is null if the account is gone."""

    user: UserResponse | None


class RoleUpdate(BaseModel):
    """Schema for an admin changing a user's role."""

    role: Role = Field(..., description="New role", examples=["admin"])
