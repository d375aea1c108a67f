"""Nucleus Identity - user directory and role management.

This module handles the identity concerns of Nucleus:
- User lifecycle (create, edit, remove)
- Role grants (replace-all, member enrollment)
- Password credentials (bcrypt hashing, policy)
- Paged, filterable user listings

Operations report business outcomes as ``IdentityResult``; see
``UserManagementService`` for the entry point.
"""

from nucleus_identity.results import (
    IdentityError,
    IdentityErrorCode,
    IdentityResult,
)
from nucleus_identity.domain.role import Permission, Role, RoleCatalogue
from nucleus_identity.domain.user import (
    Email,
    InvalidEmailError,
    InvalidSortKeyError,
    User,
    UserNotFoundError,
    UserRepository,
    UserRole,
    UserSort,
)
from nucleus_identity.exceptions import (
    IdentityServiceError,
    RoleNotFoundError,
    WeakPasswordError,
)
from nucleus_identity.repositories import (
    UserCredentialData,
    UserCredentialRepository,
)
from nucleus_identity.schemas import (
    CreateOrUpdateUserInput,
    UserInput,
    UserListInput,
)
from nucleus_identity.services import PasswordHashingService
from nucleus_identity.user_management import UserManagementService

__all__ = [
    # Results
    "IdentityError",
    "IdentityErrorCode",
    "IdentityResult",
    # Domain - Role
    "Permission",
    "Role",
    "RoleCatalogue",
    # Domain - User
    "Email",
    "InvalidEmailError",
    "InvalidSortKeyError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserSort",
    # Exceptions
    "IdentityServiceError",
    "RoleNotFoundError",
    "WeakPasswordError",
    # Repositories
    "UserCredentialData",
    "UserCredentialRepository",
    # Schemas
    "CreateOrUpdateUserInput",
    "UserInput",
    "UserListInput",
    # Services
    "PasswordHashingService",
    "UserManagementService",
]
