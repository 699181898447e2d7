"""Cookie session login/logout and the access guard dependency (require_user)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from moltendocs.core.config import get_settings
from moltendocs.core.errors import (
    InternalError,
    InvalidArgumentError,
    InvalidSessionError,
    UnauthenticatedError,
)
from moltendocs.schemas.auth import LoginRequest, PublicUser, SuccessResponse, UserResponse
from moltendocs.services.auth import SessionAuthenticator
from moltendocs.services.credential_store import CredentialStore, get_credential_store

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session_authenticator(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> SessionAuthenticator:
    return SessionAuthenticator(store, get_settings())


def require_user(
    request: Request,
    authenticator: Annotated[SessionAuthenticator, Depends(get_session_authenticator)],
) -> PublicUser:
    """
    Dependency: require a valid session cookie and return its user.

    Raises 401 "Not authenticated" without a cookie and 401 "Invalid session"
    for an unknown or expired one. Unexpected failures are logged and
    reported as a generic 500. The user is also stored on request.state.user.
    """
    try:
        session_id = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
        user = authenticator.current_user(session_id)
    except Exception as e:
        logger.exception("Session validation failed: %s", e)
        raise InternalError() from e

    if not session_id:
        raise UnauthenticatedError()
    if user is None:
        raise InvalidSessionError()
    request.state.user = user
    return user


@router.post("/login", response_model=UserResponse)
def login(
    body: LoginRequest,
    response: Response,
    authenticator: Annotated[SessionAuthenticator, Depends(get_session_authenticator)],
) -> UserResponse:
    """
    Authenticate with username and password and start a cookie session.

    The session cookie is HttpOnly and SameSite=Strict and lives as long as
    the session row.
    """
    if not body.username or not body.password:
        raise InvalidArgumentError("Username and password are required")

    result = authenticator.login(body.username, body.password)
    response.set_cookie(
        key=get_settings().SESSION_COOKIE_NAME,
        value=result.session_id,
        max_age=result.max_age,
        path="/",
        httponly=True,
        samesite="strict",
    )
    logger.info("User %s logged in", result.user.username)
    return UserResponse(user=result.user)


@router.post("/logout", response_model=SuccessResponse)
def logout(
    request: Request,
    response: Response,
    authenticator: Annotated[SessionAuthenticator, Depends(get_session_authenticator)],
) -> SuccessResponse:
    """Delete the current session (if any) and clear the cookie."""
    cookie_name = get_settings().SESSION_COOKIE_NAME
    authenticator.logout(request.cookies.get(cookie_name))
    response.set_cookie(
        key=cookie_name,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        samesite="strict",
    )
    return SuccessResponse()


@router.get("/me", response_model=UserResponse)
def me(user: Annotated[PublicUser, Depends(require_user)]) -> UserResponse:
    """Return the logged-in user; 401 when the session is missing or invalid."""
    return UserResponse(user=user)
