"""SQLAlchemy implementation for nucleus_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel, RoleModel, PermissionModel and link models
- UserCredentialModel: SQLAlchemy model for credentials
- UserRepositorySQLAlchemy: Repository implementation for users
- RoleCatalogueSQLAlchemy: Read access to roles and the member role
- UserCredentialRepositorySQLAlchemy: Repository implementation for credentials
"""

from nucleus_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.models import (
    PermissionModel,
    RoleModel,
    RolePermissionModel,
    UserCredentialModel,
    UserModel,
    UserRoleModel,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories import (
    RoleCatalogueSQLAlchemy,
    SQLAlchemyIdentityRepositoryFactory,
    UserCredentialRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "PermissionModel",
    "RoleCatalogueSQLAlchemy",
    "RoleModel",
    "RolePermissionModel",
    "SQLAlchemyIdentityRepositoryFactory",
    "TimestampMixin",
    "UserCredentialModel",
    "UserCredentialRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "UserRoleModel",
]
