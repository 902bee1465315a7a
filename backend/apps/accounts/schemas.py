"""
User API schemas - Pydantic models for request/response.
"""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from apps.core.schemas import CamelSchema

Role = Literal["admin", "supervisor", "inspector"]


# --- Request Schemas ---


class CreateUserRequest(CamelSchema):
    """Request to create a user (admin only)."""

    email: EmailStr = Field(..., description="Login email for the new user", examples=["jane@plant.com"])
    username: str = Field(..., min_length=1, max_length=150, examples=["jdoe"])
    role: Role = "inspector"
    first_name: str = Field(default="", max_length=150)
    last_name: str = Field(default="", max_length=150)
    full_name: str = Field(default="", max_length=255)
    is_active: bool = True


class UpdateUserRequest(CamelSchema):
    """Partial update of a user's profile (admin only). Omitted fields are unchanged."""

    role: Role | None = None
    username: str | None = Field(default=None, max_length=150)
    first_name: str | None = Field(default=None, max_length=150)
    last_name: str | None = Field(default=None, max_length=150)
    full_name: str | None = Field(default=None, max_length=255)
    photo_url: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None


class DeleteUserRequest(CamelSchema):
    """Request to delete a user completely."""

    uid: str = Field(
        default="",
        description="uid (Stytch member_id) of the user to delete",
        examples=["member-live-abc123"],
    )


# --- Response Schemas ---


class UserResponse(CamelSchema):
    """User profile."""

    uid: str = Field(..., description="Stytch member_id")
    role: str
    username: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    photo_url: str
    is_active: bool
    is_first_login: bool
    created_at: datetime


class UserListResponse(CamelSchema):
    """List of users."""

    users: list[UserResponse]
    count: int


class DeleteUserResponse(CamelSchema):
    """Result of a complete user deletion."""

    success: bool
    message: str
    deleted_items: list[str] = Field(
        ...,
        description="Removed data, e.g. ['auth', 'firestore-user', 'notifications:1']",
    )
    updated_items: list[str] = Field(
        ...,
        description="Preserved but modified data, e.g. ['inspections:2']",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "message": "User deleted. Inspections preserved with inspector marked as deleted.",
                "deletedItems": ["auth", "firestore-user", "notifications:1"],
                "updatedItems": ["inspections:2"],
            }
        }
    }
