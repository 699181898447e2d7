"""SQLAlchemy ORM models."""

from moltendocs.models.base import Base
from moltendocs.models.session import UserSession
from moltendocs.models.user import User

__all__ = ["Base", "User", "UserSession"]
