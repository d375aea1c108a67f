"""Application queries for the user directory."""

from nucleus_identity.application.queries.get_user_for_create_or_update_query import (
    NIL_USER_ID,
    GetUserForCreateOrUpdateQuery,
)
from nucleus_identity.application.queries.list_users_query import ListUsersQuery

__all__ = [
    "NIL_USER_ID",
    "GetUserForCreateOrUpdateQuery",
    "ListUsersQuery",
]
