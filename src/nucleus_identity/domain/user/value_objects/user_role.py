from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from nucleus_identity.domain.role import Role


@dataclass(frozen=True)
class UserRole:
    """Link between a user and a granted role.

    Identified by the (user_id, role_id) pair only. ``role`` is populated
    when the link was loaded together with its role and permissions.
    """

    user_id: UUID
    role_id: UUID
    role: Role | None = field(default=None, compare=False, repr=False)
