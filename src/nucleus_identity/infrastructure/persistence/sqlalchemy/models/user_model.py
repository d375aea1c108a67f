"""SQLAlchemy model for User aggregate."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nucleus_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)

if TYPE_CHECKING:
    from nucleus_identity.infrastructure.persistence.sqlalchemy.models.role_model import (  # noqa: E501
        UserRoleModel,
    )


class UserModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for persisting User aggregates.

    Password hashes live in the user_credentials table.
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    username: Mapped[str] = mapped_column(
        String(256),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    security_stamp: Mapped[str] = mapped_column(String(64), nullable=False)

    user_roles: Mapped[list[UserRoleModel]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"
