"""Application DTOs for identity management."""

from nucleus_identity.application.dtos.user_dtos import (
    PagedResult,
    PermissionDTO,
    RoleDTO,
    UserDetailDTO,
    UserForCreateOrUpdateDTO,
    UserListItemDTO,
)

__all__ = [
    "PagedResult",
    "PermissionDTO",
    "RoleDTO",
    "UserDetailDTO",
    "UserForCreateOrUpdateDTO",
    "UserListItemDTO",
]
