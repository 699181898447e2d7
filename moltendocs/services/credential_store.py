"""Users and login sessions persisted through SQLAlchemy."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from moltendocs.core.config import get_settings
from moltendocs.core import database
from moltendocs.core.database import ensure_sqlite_directory
from moltendocs.core.errors import ConflictError, NotFoundError, NotFoundOrProtectedError
from moltendocs.core.security import generate_session_token, hash_password, verify_password
from moltendocs.models import Base, User, UserSession
from moltendocs.models.base import utcnow
from moltendocs.models.user import ADMIN_USERNAME
from moltendocs.schemas.auth import PublicUser
from moltendocs.schemas.users import UserListItem

if TYPE_CHECKING:
    from moltendocs.core.config import Settings

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Persistence for users and sessions.

    Every method opens its own short-lived ORM session, so one instance can be
    shared by all request threads.
    """

    def __init__(self, engine: Engine, settings: "Settings") -> None:
        self.engine = engine
        self.settings = settings
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _hash(self, password: str) -> str:
        return hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)

    def initialize(self) -> None:
        """Create the schema if missing and bootstrap the admin account. Idempotent."""
        ensure_sqlite_directory(self.engine)
        Base.metadata.create_all(bind=self.engine)

        with self._session_factory() as db:
            existing = db.query(User.id).filter(User.username == ADMIN_USERNAME).first()
            if existing is not None:
                return
            default_password = self.settings.DEFAULT_ADMIN_PASSWORD.get_secret_value()
            db.add(User(username=ADMIN_USERNAME, password_hash=self._hash(default_password)))
            try:
                db.commit()
            except IntegrityError:
                # Another process created it between the check and the insert.
                db.rollback()
                return
        logger.warning(
            "Created default admin user '%s' with the default password; change it from the admin panel.",
            ADMIN_USERNAME,
        )

    def ping(self) -> bool:
        """Run a trivial query to verify the database is reachable."""
        try:
            with self._session_factory() as db:
                db.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    def authenticate(self, username: str, password: str) -> PublicUser | None:
        """Return the user when username exists and the password matches, else None."""
        with self._session_factory() as db:
            user = db.query(User).filter(User.username == username).first()
            if user is None:
                return None
            if not verify_password(password, user.password_hash):
                return None
            return PublicUser(id=user.id, username=user.username)

    def create_session(self, user_id: int) -> str:
        """Issue a new session for user_id and return its token."""
        expires_at = utcnow() + timedelta(hours=self.settings.SESSION_TTL_HOURS)
        with self._session_factory() as db:
            session_id = generate_session_token()
            while db.get(UserSession, session_id) is not None:
                session_id = generate_session_token()
            db.add(UserSession(id=session_id, user_id=user_id, expires_at=expires_at))
            db.commit()
        return session_id

    def validate_session(self, session_id: str) -> PublicUser | None:
        """Return the session's user if the session exists and has not expired."""
        with self._session_factory() as db:
            row = (
                db.query(User.id, User.username)
                .join(UserSession, UserSession.user_id == User.id)
                .filter(UserSession.id == session_id, UserSession.expires_at > utcnow())
                .first()
            )
            if row is None:
                return None
            return PublicUser(id=row.id, username=row.username)

    def delete_session(self, session_id: str) -> None:
        """Remove a session; unknown ids are ignored."""
        with self._session_factory() as db:
            db.query(UserSession).filter(UserSession.id == session_id).delete(
                synchronize_session=False
            )
            db.commit()

    def clean_expired_sessions(self) -> int:
        """Delete every session whose expiry has passed. Returns the number removed."""
        with self._session_factory() as db:
            deleted = (
                db.query(UserSession)
                .filter(UserSession.expires_at <= utcnow())
                .delete(synchronize_session=False)
            )
            db.commit()
        return deleted

    def get_all_users(self) -> list[UserListItem]:
        """All users, most recently created first."""
        with self._session_factory() as db:
            users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
            return [UserListItem.model_validate(u) for u in users]

    def create_user(self, username: str, password: str) -> PublicUser:
        """Insert a user. Raises ConflictError if the username is taken."""
        with self._session_factory() as db:
            existing = db.query(User.id).filter(User.username == username).first()
            if existing is not None:
                raise ConflictError("Username already exists")
            user = User(username=username, password_hash=self._hash(password))
            db.add(user)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError("Username already exists") from e
            return PublicUser(id=user.id, username=user.username)

    def delete_user(self, user_id: int) -> None:
        """
        Delete a user and their sessions in one transaction.

        The admin account is excluded by the delete predicate itself; when no
        row matches, the session deletes are rolled back and
        NotFoundOrProtectedError is raised.
        """
        with self._session_factory() as db:
            db.query(UserSession).filter(UserSession.user_id == user_id).delete(
                synchronize_session=False
            )
            deleted = (
                db.query(User)
                .filter(User.id == user_id, User.username != ADMIN_USERNAME)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                db.rollback()
                raise NotFoundOrProtectedError()
            db.commit()

    def update_user_password(self, user_id: int, new_password: str) -> None:
        """Replace a user's password hash. Raises NotFoundError if the user does not exist."""
        password_hash = self._hash(new_password)
        with self._session_factory() as db:
            updated = (
                db.query(User)
                .filter(User.id == user_id)
                .update(
                    {User.password_hash: password_hash, User.updated_at: utcnow()},
                    synchronize_session=False,
                )
            )
            if updated == 0:
                db.rollback()
                raise NotFoundError("User not found")
            db.commit()


_store: CredentialStore | None = None
_store_lock = threading.Lock()


def get_credential_store() -> CredentialStore:
    """
    Return the process-wide store, creating and initializing it on first use.

    Concurrent first callers wait on the lock; schema setup and the admin
    bootstrap run exactly once. Also used as a FastAPI dependency.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                store = CredentialStore(database.engine, get_settings())
                store.initialize()
                _store = store
    return _store
