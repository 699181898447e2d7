"""Tests for moltendocs.services.credential_store against a temporary SQLite database."""

import tempfile
import threading
import unittest
from datetime import timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

from moltendocs.core.config import Settings
from moltendocs.core.database import build_engine
from moltendocs.core.errors import ConflictError, NotFoundError, NotFoundOrProtectedError
from moltendocs.models import User, UserSession
from moltendocs.models.base import utcnow
from moltendocs.services import credential_store as credential_store_module
from moltendocs.services.credential_store import CredentialStore, get_credential_store


def _make_store(tmp_dir: str, **overrides: object) -> CredentialStore:
    """Initialized store on a fresh SQLite file with cheap bcrypt rounds."""
    url = f"sqlite:///{Path(tmp_dir) / 'db' / 'test.db'}"
    settings = Settings(DATABASE_URL=url, BCRYPT_ROUNDS=4, **overrides)
    store = CredentialStore(build_engine(url), settings)
    store.initialize()
    return store


class CredentialStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = _make_store(self._tmp.name)

    def tearDown(self) -> None:
        self.store.engine.dispose()
        self._tmp.cleanup()

    def _count(self, model: type) -> int:
        with self.store._session_factory() as db:
            return db.query(model).count()


class TestInitialize(CredentialStoreTestCase):
    """initialize creates the schema and exactly one admin account."""

    def test_creates_sqlite_directory_and_admin(self) -> None:
        self.assertTrue((Path(self._tmp.name) / "db" / "test.db").exists())
        users = self.store.get_all_users()
        self.assertEqual([u.username for u in users], ["admin"])

    def test_idempotent(self) -> None:
        self.store.initialize()
        self.store.initialize()
        self.assertEqual(self._count(User), 1)

    def test_admin_uses_default_password(self) -> None:
        user = self.store.authenticate("admin", "admin123")
        self.assertIsNotNone(user)
        self.assertEqual(user.username, "admin")

    def test_existing_admin_password_not_reset(self) -> None:
        admin = self.store.authenticate("admin", "admin123")
        self.store.update_user_password(admin.id, "changed-password")
        self.store.initialize()
        self.assertIsNone(self.store.authenticate("admin", "admin123"))
        self.assertIsNotNone(self.store.authenticate("admin", "changed-password"))


class TestAuthenticate(CredentialStoreTestCase):
    def test_created_user_authenticates_with_same_id(self) -> None:
        created = self.store.create_user("writer", "s3cret-pw")
        user = self.store.authenticate("writer", "s3cret-pw")
        self.assertIsNotNone(user)
        self.assertEqual(user.id, created.id)
        self.assertEqual(user.username, "writer")

    def test_wrong_password_returns_none(self) -> None:
        self.store.create_user("writer", "s3cret-pw")
        self.assertIsNone(self.store.authenticate("writer", "wrong-pw"))

    def test_unknown_user_returns_none(self) -> None:
        self.assertIsNone(self.store.authenticate("nobody", "whatever"))

    def test_username_is_case_sensitive(self) -> None:
        self.store.create_user("Writer", "s3cret-pw")
        self.assertIsNone(self.store.authenticate("writer", "s3cret-pw"))

    def test_stored_hash_is_not_plaintext(self) -> None:
        self.store.create_user("writer", "s3cret-pw")
        with self.store._session_factory() as db:
            row = db.query(User).filter(User.username == "writer").one()
        self.assertNotEqual(row.password_hash, "s3cret-pw")
        self.assertTrue(row.password_hash.startswith("$2"))


class TestSessions(CredentialStoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self.store.create_user("writer", "s3cret-pw")

    def test_valid_session_returns_user(self) -> None:
        session_id = self.store.create_session(self.user.id)
        user = self.store.validate_session(session_id)
        self.assertEqual(user.id, self.user.id)
        self.assertEqual(user.username, "writer")

    def test_tokens_are_unique_and_long(self) -> None:
        tokens = {self.store.create_session(self.user.id) for _ in range(5)}
        self.assertEqual(len(tokens), 5)
        for token in tokens:
            self.assertGreaterEqual(len(token), 40)

    def test_session_expires_after_ttl(self) -> None:
        session_id = self.store.create_session(self.user.id)
        with self.store._session_factory() as db:
            row = db.get(UserSession, session_id)
            lifetime = row.expires_at - row.created_at
        self.assertAlmostEqual(lifetime.total_seconds(), 24 * 3600, delta=5)

    def test_never_issued_token_is_invalid(self) -> None:
        self.assertIsNone(self.store.validate_session("not-a-real-token"))

    def test_deleted_session_is_invalid(self) -> None:
        session_id = self.store.create_session(self.user.id)
        self.store.delete_session(session_id)
        self.assertIsNone(self.store.validate_session(session_id))

    def test_delete_unknown_session_is_not_an_error(self) -> None:
        self.store.delete_session("missing")
        self.store.delete_session("missing")

    def test_expired_session_is_invalid_before_sweep(self) -> None:
        past = utcnow() - timedelta(hours=25)
        with patch.object(credential_store_module, "utcnow", return_value=past):
            session_id = self.store.create_session(self.user.id)
        self.assertIsNone(self.store.validate_session(session_id))
        # Row still exists: validation does not mutate state.
        self.assertEqual(self._count(UserSession), 1)

    def test_clean_expired_sessions_removes_only_expired(self) -> None:
        past = utcnow() - timedelta(hours=25)
        with patch.object(credential_store_module, "utcnow", return_value=past):
            self.store.create_session(self.user.id)
            self.store.create_session(self.user.id)
        live = self.store.create_session(self.user.id)

        self.assertEqual(self.store.clean_expired_sessions(), 2)
        self.assertEqual(self.store.clean_expired_sessions(), 0)
        self.assertIsNotNone(self.store.validate_session(live))


class TestUsers(CredentialStoreTestCase):
    def test_duplicate_username_conflicts_and_keeps_one_row(self) -> None:
        self.store.create_user("writer", "s3cret-pw")
        with self.assertRaises(ConflictError):
            self.store.create_user("writer", "other-pw")
        with self.store._session_factory() as db:
            count = db.query(User).filter(User.username == "writer").count()
        self.assertEqual(count, 1)
        self.assertIsNotNone(self.store.authenticate("writer", "s3cret-pw"))

    def test_delete_admin_is_refused(self) -> None:
        admin = self.store.authenticate("admin", "admin123")
        admin_session = self.store.create_session(admin.id)
        with self.assertRaises(NotFoundOrProtectedError):
            self.store.delete_user(admin.id)
        self.assertIsNotNone(self.store.authenticate("admin", "admin123"))
        # The failed delete is rolled back, so admin stays logged in.
        self.assertIsNotNone(self.store.validate_session(admin_session))

    def test_delete_missing_user(self) -> None:
        with self.assertRaises(NotFoundOrProtectedError):
            self.store.delete_user(9999)

    def test_delete_user_removes_sessions(self) -> None:
        user = self.store.create_user("writer", "s3cret-pw")
        session_id = self.store.create_session(user.id)
        self.store.delete_user(user.id)
        self.assertIsNone(self.store.validate_session(session_id))
        self.assertIsNone(self.store.authenticate("writer", "s3cret-pw"))
        with self.store._session_factory() as db:
            remaining = db.query(UserSession).filter(UserSession.user_id == user.id).count()
        self.assertEqual(remaining, 0)

    def test_update_password(self) -> None:
        user = self.store.create_user("writer", "s3cret-pw")
        with self.store._session_factory() as db:
            before = db.get(User, user.id).updated_at
        self.store.update_user_password(user.id, "new-password")
        self.assertIsNone(self.store.authenticate("writer", "s3cret-pw"))
        self.assertIsNotNone(self.store.authenticate("writer", "new-password"))
        with self.store._session_factory() as db:
            after = db.get(User, user.id).updated_at
        self.assertGreater(after, before)

    def test_update_password_missing_user(self) -> None:
        with self.assertRaises(NotFoundError):
            self.store.update_user_password(9999, "new-password")

    def test_get_all_users_newest_first(self) -> None:
        self.store.create_user("first", "s3cret-pw")
        self.store.create_user("second", "s3cret-pw")
        users = self.store.get_all_users()
        self.assertEqual([u.username for u in users], ["second", "first", "admin"])
        self.assertIsNotNone(users[0].created_at)

    def test_ping(self) -> None:
        self.assertTrue(self.store.ping())


class TestGetCredentialStore(unittest.TestCase):
    """get_credential_store constructs and initializes the shared store exactly once."""

    def setUp(self) -> None:
        self._saved = credential_store_module._store
        credential_store_module._store = None

    def tearDown(self) -> None:
        credential_store_module._store = self._saved

    def test_concurrent_first_callers_initialize_once(self) -> None:
        instance = MagicMock()
        start = threading.Barrier(8)
        results: list[object] = []

        def call() -> None:
            start.wait()
            results.append(get_credential_store())

        with patch.object(credential_store_module, "CredentialStore", return_value=instance) as cls:
            threads = [threading.Thread(target=call) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        cls.assert_called_once()
        instance.initialize.assert_called_once()
        self.assertEqual(len(results), 8)
        self.assertTrue(all(r is instance for r in results))

    def test_reuses_existing_instance(self) -> None:
        instance = MagicMock()
        with patch.object(credential_store_module, "CredentialStore", return_value=instance) as cls:
            first = get_credential_store()
            second = get_credential_store()
        self.assertIs(first, second)
        cls.assert_called_once()


if __name__ == "__main__":
    unittest.main()
