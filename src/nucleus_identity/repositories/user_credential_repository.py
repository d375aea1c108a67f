"""Storage contract for password credentials.

Credentials live apart from the ``User`` aggregate: a user has at most one,
keyed by the user id, and may have none at all.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserCredentialData:
    """Stored hash of one user's password."""

    user_id: UUID
    password_hash: str
    changed_at: datetime | None


class UserCredentialRepository(ABC):
    """Credential store. Implementations flush but never commit."""

    @abstractmethod
    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        """Insert the credential, or replace the hash if one exists."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        ...

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Remove the credential. False when the user had none."""
