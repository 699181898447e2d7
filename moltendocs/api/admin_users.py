"""Admin user management: list, create, change password, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from moltendocs.core.errors import InvalidArgumentError
from moltendocs.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN
from moltendocs.schemas.auth import SuccessResponse
from moltendocs.schemas.users import (
    CreatedUserResponse,
    CreateUserRequest,
    UpdatePasswordRequest,
    UsersListResponse,
)
from moltendocs.services.credential_store import CredentialStore, get_credential_store

router = APIRouter()


def _validate_password(password: str) -> None:
    if len(password) < PASSWORD_MIN_LEN:
        raise InvalidArgumentError(
            f"Password must be at least {PASSWORD_MIN_LEN} characters long"
        )
    if len(password) > PASSWORD_MAX_LEN:
        raise InvalidArgumentError(
            f"Password must be at most {PASSWORD_MAX_LEN} characters long"
        )


@router.get("", response_model=UsersListResponse)
def list_users(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> UsersListResponse:
    """List all users, newest first."""
    return UsersListResponse(users=store.get_all_users())


@router.post("", response_model=CreatedUserResponse, status_code=201)
def create_user(
    body: CreateUserRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> CreatedUserResponse:
    if not body.username or not body.password:
        raise InvalidArgumentError("Username and password are required")
    if len(body.username) > USERNAME_MAX_LEN:
        raise InvalidArgumentError("Invalid username length")
    _validate_password(body.password)
    user = store.create_user(body.username, body.password)
    return CreatedUserResponse(user=user)


@router.put("/{user_id}", response_model=SuccessResponse)
def update_user_password(
    user_id: int,
    body: UpdatePasswordRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> SuccessResponse:
    if not body.password:
        raise InvalidArgumentError("Password is required")
    _validate_password(body.password)
    store.update_user_password(user_id, body.password)
    return SuccessResponse()


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: int,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> SuccessResponse:
    """Delete a user and their sessions. The admin account cannot be deleted (400)."""
    store.delete_user(user_id)
    return SuccessResponse()
