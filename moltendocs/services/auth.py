"""Login, logout and current-user lookup on top of the credential store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from moltendocs.core.errors import InvalidCredentialsError
from moltendocs.schemas.auth import PublicUser

if TYPE_CHECKING:
    from moltendocs.core.config import Settings
    from moltendocs.services.credential_store import CredentialStore


@dataclass(frozen=True)
class LoginResult:
    """A new session and the cookie lifetime the caller must set it with."""

    session_id: str
    user: PublicUser
    max_age: int


class SessionAuthenticator:
    """Thin orchestration over CredentialStore used by the auth routes and the access guard."""

    def __init__(self, store: "CredentialStore", settings: "Settings") -> None:
        self.store = store
        self.settings = settings

    @property
    def session_max_age(self) -> int:
        """Cookie Max-Age in seconds; matches the session row expiry."""
        return self.settings.SESSION_TTL_HOURS * 3600

    def login(self, username: str, password: str) -> LoginResult:
        """
        Verify credentials and issue a session.

        Raises InvalidCredentialsError for an unknown user and for a wrong
        password alike.
        """
        user = self.store.authenticate(username, password)
        if user is None:
            raise InvalidCredentialsError()
        session_id = self.store.create_session(user.id)
        return LoginResult(session_id=session_id, user=user, max_age=self.session_max_age)

    def logout(self, session_id: str | None) -> None:
        if session_id:
            self.store.delete_session(session_id)

    def current_user(self, session_id: str | None) -> PublicUser | None:
        if not session_id:
            return None
        return self.store.validate_session(session_id)
