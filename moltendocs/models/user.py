"""ORM model for admin users."""

from sqlalchemy import Column, DateTime, Integer, String

from moltendocs.models.base import Base, utcnow

# The bootstrap account; it can never be deleted.
ADMIN_USERNAME = "admin"


class User(Base):
    """
    Admin panel account. Every user has full admin rights.

    username is unique and compared case-sensitively.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
