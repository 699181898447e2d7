"""ORM model for login sessions (cookie bearer tokens)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from moltendocs.models.base import Base, utcnow


class UserSession(Base):
    """
    One row per successful login. Rows are never updated.

    A session is valid only while expires_at is in the future; expired rows
    stay inert until the sweep removes them.
    """

    __tablename__ = "sessions"

    id = Column(String(128), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
