"""DTOs for the user directory and the user edit form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar
from uuid import UUID

from nucleus_identity.domain.role import Permission, Role
from nucleus_identity.domain.user import User

T = TypeVar("T")


@dataclass(frozen=True)
class PermissionDTO:
    id: UUID
    name: str
    display_name: Optional[str]

    @classmethod
    def from_permission(cls, permission: Permission) -> PermissionDTO:
        return cls(
            id=permission.id,
            name=permission.name,
            display_name=permission.display_name,
        )


@dataclass(frozen=True)
class RoleDTO:
    id: UUID
    name: str
    permissions: list[PermissionDTO] = field(default_factory=list)

    @classmethod
    def from_role(cls, role: Role) -> RoleDTO:
        return cls(
            id=role.id,
            name=role.name,
            permissions=[PermissionDTO.from_permission(p) for p in role.permissions],
        )


@dataclass(frozen=True)
class UserListItemDTO:
    """DTO for a user in a list view."""

    id: UUID
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> UserListItemDTO:
        return cls(id=user.id, username=user.username, email=user.email)


@dataclass(frozen=True)
class UserDetailDTO:
    """DTO for a single user with the roles granted to it."""

    id: UUID
    username: str
    email: str
    roles: list[RoleDTO] = field(default_factory=list)

    @classmethod
    def from_user(cls, user: User) -> UserDetailDTO:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            roles=[RoleDTO.from_role(role) for role in user.roles],
        )


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of items plus the size of the unpaginated result."""

    items: list[T]
    total_count: int
    page_index: int = 0
    page_size: int = 0

    @property
    def page_count(self) -> int:
        if self.total_count == 0 or self.page_size <= 0:
            return 1
        return (self.total_count + self.page_size - 1) // self.page_size


@dataclass(frozen=True)
class UserForCreateOrUpdateDTO:
    """Everything a create/edit form needs.

    ``user`` is None and ``granted_role_ids`` is empty for a create form.
    """

    all_roles: list[RoleDTO]
    user: Optional[UserDetailDTO] = None
    granted_role_ids: list[UUID] = field(default_factory=list)
