"""
User model - account identity, credential and global role.
A user with no password is a "shell" user (invited, never signed up locally).
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounts.db.base import Base

if TYPE_CHECKING:
    from accounts.db.models.auth_identity import AuthIdentity

ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """User entity. Ids are opaque UUID strings."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(32), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(32), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default=ROLE_MEMBER, index=True)
    disabled: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Loaded only on request (selectinload); lazy loading is not possible under asyncio
    auth_identities: Mapped[list["AuthIdentity"]] = relationship(
        "AuthIdentity", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def is_shell(self) -> bool:
        return self.password is None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
