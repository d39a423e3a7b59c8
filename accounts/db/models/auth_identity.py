"""
AuthIdentity model - external login identity (e.g. email, ldap, saml) linked to a user.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounts.db.base import Base

if TYPE_CHECKING:
    from accounts.db.models.user import User


class AuthIdentity(Base):
    """One identity per (provider_id, provider_type)."""

    __tablename__ = "auth_identities"

    provider_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    provider_type: Mapped[str] = mapped_column(String(32), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user: Mapped["User"] = relationship("User", back_populates="auth_identities")

    def __repr__(self) -> str:
        return f"<AuthIdentity(provider_type={self.provider_type}, provider_id={self.provider_id})>"
