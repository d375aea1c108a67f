"""User aggregate: identity, security stamp and granted roles."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from nucleus_identity.domain.shared.time import utc_now
from nucleus_identity.domain.user.value_objects.email import normalize_email
from nucleus_identity.domain.user.value_objects.user_role import UserRole

if TYPE_CHECKING:
    from nucleus_identity.domain.role import Role


# Stands for "no user yet"; never stored as a real id
NIL_USER_ID = UUID(int=0)


def new_security_stamp() -> str:
    return uuid4().hex.upper()


class User:
    """
    User aggregate root.

    Owns its collection of ``UserRole`` links. Role membership is always
    replaced as a whole, never patched incrementally.
    """

    def __init__(  # noqa: PLR0913
        self,
        username: str,
        email: str,
        id: UUID | None = None,
        security_stamp: str | None = None,
        user_roles: Iterable[UserRole] | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._username = username.strip()
        self._email = normalize_email(email)
        self._security_stamp = security_stamp or new_security_stamp()
        self._user_roles: list[UserRole] = list(user_roles or [])
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email

    @property
    def security_stamp(self) -> str:
        return self._security_stamp

    @property
    def user_roles(self) -> tuple[UserRole, ...]:
        return tuple(self._user_roles)

    @property
    def granted_role_ids(self) -> list[UUID]:
        return [link.role_id for link in self._user_roles]

    @property
    def roles(self) -> list[Role]:
        """Granted roles that were loaded together with the user."""
        return [link.role for link in self._user_roles if link.role is not None]

    @property
    def permission_names(self) -> set[str]:
        return {p.name for role in self.roles for p in role.permissions}

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_username(self, username: str) -> None:
        self._username = username.strip()
        self._updated_at = utc_now()

    def change_email(self, email: str) -> None:
        self._email = normalize_email(email)
        self._updated_at = utc_now()

    def regenerate_security_stamp(self) -> None:
        """Invalidate anything issued against the previous stamp."""
        self._security_stamp = new_security_stamp()
        self._updated_at = utc_now()

    def replace_roles(self, role_ids: Iterable[UUID]) -> None:
        """Discard every current link and grant exactly ``role_ids``.

        Duplicate ids collapse into a single link; first occurrence wins.
        """
        self._user_roles = [
            UserRole(user_id=self._id, role_id=role_id)
            for role_id in dict.fromkeys(role_ids)
        ]
        self._updated_at = utc_now()

    def clear_roles(self) -> None:
        self._user_roles.clear()

    @classmethod
    def create(
        cls,
        username: str,
        email: str,
        id: UUID | None = None,
    ) -> User:
        if id == NIL_USER_ID:
            id = None
        return cls(username=username, email=email, id=id)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        username: str,
        email: str,
        security_stamp: str,
        user_roles: Iterable[UserRole],
        created_at: datetime,
        updated_at: datetime,
    ) -> User:
        return cls(
            id=id,
            username=username,
            email=email,
            security_stamp=security_stamp,
            user_roles=user_roles,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username})"
