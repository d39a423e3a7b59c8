"""
SQLAlchemy declarative base and metadata.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models (users, auth identities)."""

    pass
