"""Errors raised by the user domain.

Business-rule rejections are reported through ``IdentityResult``; these
exceptions cover malformed input and lookups with nothing to report on.
"""

from uuid import UUID


class InvalidEmailError(ValueError):
    """The address is empty, too long or not shaped like an email."""


class InvalidSortKeyError(ValueError):
    def __init__(self, sort_key: str) -> None:
        self.sort_key = sort_key
        super().__init__(f"Unsupported sort key: {sort_key!r}")


class UserNotFoundError(LookupError):
    def __init__(self, user_id: UUID | str) -> None:
        self.user_id = user_id
        super().__init__(f"No user with id {user_id}")


class UserAlreadyExistsError(Exception):
    """Raised by the store when the id or user name is taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"User name already taken: {username}")
