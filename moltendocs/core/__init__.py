"""Core app configuration, database and error types."""

from moltendocs.core.config import get_settings, settings

__all__ = ["get_settings", "settings"]
