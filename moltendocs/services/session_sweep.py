"""Expired session cleanup: delete session rows whose expiry has passed."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from moltendocs.core.config import Settings
    from moltendocs.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


def run_session_sweep(store: "CredentialStore", settings: "Settings") -> int:
    """
    Delete expired sessions. Returns the number of rows removed.

    Idempotent: safe to run on any schedule, or never, since session
    validation checks expiry on its own.
    """
    if not settings.SESSION_SWEEP_ENABLED:
        logger.info("Session sweep is disabled (SESSION_SWEEP_ENABLED=false); skipping.")
        return 0

    deleted_count = store.clean_expired_sessions()

    if deleted_count > 0:
        logger.info("Session sweep run: sessions_deleted=%s", deleted_count)
    return deleted_count
