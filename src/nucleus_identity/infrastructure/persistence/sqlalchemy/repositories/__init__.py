# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity."""

from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyIdentityRepositoryFactory,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.role_catalogue import (
    RoleCatalogueSQLAlchemy,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.user_credential_repository import (
    UserCredentialRepositorySQLAlchemy,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "RoleCatalogueSQLAlchemy",
    "SQLAlchemyIdentityRepositoryFactory",
    "UserCredentialRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
