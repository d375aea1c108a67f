"""Role domain: roles and their permissions, read-only for user management."""

from nucleus_identity.domain.role.entities import Permission, Role
from nucleus_identity.domain.role.repositories import RoleCatalogue

__all__ = [
    "Permission",
    "Role",
    "RoleCatalogue",
]
