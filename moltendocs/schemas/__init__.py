"""Pydantic request/response schemas."""

from moltendocs.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    PublicUser,
    SuccessResponse,
    UserResponse,
)
from moltendocs.schemas.documents import (
    CreateDocumentRequest,
    CreatedDocumentResponse,
    DocPage,
    DocumentContent,
    DocumentsResponse,
    DocumentSummary,
    PageNode,
    PagesResponse,
    UpdateDocumentRequest,
)
from moltendocs.schemas.health import HealthResponse
from moltendocs.schemas.order import DirectoryOrderRequest, GlobalOrderRequest
from moltendocs.schemas.users import (
    CreatedUserResponse,
    CreateUserRequest,
    UpdatePasswordRequest,
    UserListItem,
    UsersListResponse,
)

__all__ = [
    "CreateDocumentRequest",
    "CreateUserRequest",
    "CreatedDocumentResponse",
    "CreatedUserResponse",
    "DirectoryOrderRequest",
    "DocPage",
    "DocumentContent",
    "DocumentSummary",
    "DocumentsResponse",
    "ErrorResponse",
    "GlobalOrderRequest",
    "HealthResponse",
    "LoginRequest",
    "PageNode",
    "PagesResponse",
    "PublicUser",
    "SuccessResponse",
    "UpdateDocumentRequest",
    "UpdatePasswordRequest",
    "UserListItem",
    "UserResponse",
    "UsersListResponse",
]
