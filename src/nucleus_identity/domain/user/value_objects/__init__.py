"""Value objects for the user domain."""

from nucleus_identity.domain.user.value_objects.email import Email, normalize_email
from nucleus_identity.domain.user.value_objects.user_role import UserRole
from nucleus_identity.domain.user.value_objects.user_sort import (
    SortDirection,
    UserSort,
    UserSortField,
)

__all__ = [
    "Email",
    "SortDirection",
    "UserRole",
    "UserSort",
    "UserSortField",
    "normalize_email",
]
