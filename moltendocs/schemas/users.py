"""Request/response schemas for admin user management."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from moltendocs.schemas.auth import PublicUser


class CreateUserRequest(BaseModel):
    username: str | None = Field(default=None, description="Username (case-sensitive)")
    password: str | None = Field(default=None, description="Password (at least 6 characters)")


class UpdatePasswordRequest(BaseModel):
    password: str | None = Field(default=None, description="New password (at least 6 characters)")


class UserListItem(BaseModel):
    """User entry for the admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: datetime


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[UserListItem]


class CreatedUserResponse(BaseModel):
    success: bool = True
    user: PublicUser
