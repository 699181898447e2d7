"""
CLI entrypoint for the expired-session sweep. Run from cron, e.g.:

  python -m moltendocs.sweep

Or hourly: 0 * * * * cd /path/to/moltendocs && .venv/bin/python -m moltendocs.sweep
"""

import logging
import sys

from moltendocs.core.config import get_settings
from moltendocs.services.credential_store import get_credential_store
from moltendocs.services.session_sweep import run_session_sweep

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Delete sessions whose expiry has passed."""
    settings = get_settings()
    try:
        store = get_credential_store()
        sessions_deleted = run_session_sweep(store, settings)
        logger.info("Session sweep completed: sessions_deleted=%s", sessions_deleted)
        return 0
    except Exception as e:
        logger.exception("Session sweep failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
