"""Allow-listed sort orders for user listings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from nucleus_identity.domain.user.exceptions import InvalidSortKeyError


class UserSortField(str, Enum):
    """Fields a user listing may be ordered by."""

    USERNAME = "username"
    EMAIL = "email"
    ID = "id"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Accepted spellings, compared case-insensitively
_FIELD_ALIASES: dict[str, UserSortField] = {
    "username": UserSortField.USERNAME,
    "user_name": UserSortField.USERNAME,
    "email": UserSortField.EMAIL,
    "id": UserSortField.ID,
}


@dataclass(frozen=True)
class UserSort:
    """A validated sort order.

    Examples
    --------
    >>> UserSort.parse(None)
    UserSort(field=<UserSortField.USERNAME: 'username'>, direction=<SortDirection.ASC: 'asc'>)
    >>> UserSort.parse("Email desc").direction
    <SortDirection.DESC: 'desc'>
    >>> UserSort.parse("-username").descending
    True
    """

    field: UserSortField = UserSortField.USERNAME
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC

    @classmethod
    def parse(cls, sort_by: str | None) -> UserSort:
        """Parse ``<field>[ asc|desc]`` or ``-<field>``.

        A missing or blank key yields the default order (username ascending).

        Raises
        ------
        InvalidSortKeyError
            If the field is not allow-listed or the expression is malformed
        """
        if sort_by is None or not sort_by.strip():
            return cls()

        expression = sort_by.strip()
        direction = SortDirection.ASC

        if expression.startswith("-"):
            direction = SortDirection.DESC
            expression = expression[1:]

        parts = expression.split()
        if len(parts) == 2:
            try:
                direction = SortDirection(parts[1].lower())
            except ValueError as e:
                raise InvalidSortKeyError(sort_by) from e
        elif len(parts) != 1:
            raise InvalidSortKeyError(sort_by)

        field = _FIELD_ALIASES.get(parts[0].lower())
        if field is None:
            raise InvalidSortKeyError(sort_by)

        return cls(field=field, direction=direction)
