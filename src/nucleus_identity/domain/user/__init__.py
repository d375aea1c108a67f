"""User domain manages user identity and role membership.

This domain handles:
- User aggregate (id, user name, email, security stamp, role links)
- Allow-listed listing order
- Repository contract for persistence
"""

from nucleus_identity.domain.user.aggregates import NIL_USER_ID, User
from nucleus_identity.domain.user.exceptions import (
    InvalidEmailError,
    InvalidSortKeyError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from nucleus_identity.domain.user.repositories import UserRepository
from nucleus_identity.domain.user.value_objects import (
    Email,
    SortDirection,
    UserRole,
    UserSort,
    UserSortField,
    normalize_email,
)

__all__ = [
    "NIL_USER_ID",
    "Email",
    "InvalidEmailError",
    "InvalidSortKeyError",
    "SortDirection",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserSort",
    "UserSortField",
    "normalize_email",
]
