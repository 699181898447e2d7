"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login. Presence is checked by the handler so it can answer 400."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class PublicUser(BaseModel):
    """Authenticated user as exposed to callers (never includes the hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class UserResponse(BaseModel):
    """Response for login and GET /auth/me."""

    success: bool = True
    user: PublicUser


class SuccessResponse(BaseModel):
    """Generic acknowledgement for mutations without a payload."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
