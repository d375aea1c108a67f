"""SQLAlchemy model for password credentials, at most one per user."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from nucleus_identity.domain.shared.time import utc_now
from nucleus_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase


class UserCredentialModel(IdentityBase):
    """Password hash keyed by its user.

    Removing the row leaves the user without a password.
    """

    __tablename__ = "user_credentials"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<UserCredentialModel(user_id={self.user_id})>"
