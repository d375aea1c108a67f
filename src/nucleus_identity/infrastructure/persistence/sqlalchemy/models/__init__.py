# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from nucleus_identity.infrastructure.persistence.sqlalchemy.models.role_model import (
    PermissionModel,
    RoleModel,
    RolePermissionModel,
    UserRoleModel,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.models.user_credential_model import (
    UserCredentialModel,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "PermissionModel",
    "RoleModel",
    "RolePermissionModel",
    "UserCredentialModel",
    "UserModel",
    "UserRoleModel",
]
