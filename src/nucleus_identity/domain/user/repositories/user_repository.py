"""User repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from nucleus_identity.domain.user.aggregates.user import User
from nucleus_identity.domain.user.value_objects.user_sort import UserSort


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Implementations flush but never commit; the caller owns the unit of work.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID, without role links."""

    @abstractmethod
    async def find_by_id_with_roles(self, user_id: UUID) -> Optional[User]:
        """Find a user by ID with role links, roles and permissions loaded."""

    @abstractmethod
    async def find_by_email_with_roles(self, email: str) -> Optional[User]:
        """Find a user by email with role links, roles and permissions loaded."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by user name (case-insensitive)."""

    @abstractmethod
    async def list_page(
        self,
        filter_text: Optional[str],
        sort: UserSort,
        offset: int,
        limit: int,
    ) -> tuple[list[User], int]:
        """Return one page of users and the unpaginated match count.

        ``filter_text`` is matched case-insensitively as a substring of the
        user name or the email address.
        """

    @abstractmethod
    async def add(self, user: User) -> None:
        """Insert a new user. Never overwrites a stored one.

        Raises ``UserAlreadyExistsError`` when the id or user name is taken.
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """Update a stored user's identity fields.

        Raises ``UserNotFoundError`` when the user is no longer stored.
        """

    @abstractmethod
    async def replace_roles(self, user_id: UUID, role_ids: Iterable[UUID]) -> None:
        """Delete every role link of the user, then insert one per role id."""

    @abstractmethod
    async def delete(self, user_id: UUID) -> None:
        """Delete a user and its role links."""
