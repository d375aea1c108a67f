"""Role catalogue interface."""

from abc import ABC, abstractmethod
from typing import Optional

from nucleus_identity.domain.role.entities import Role


class RoleCatalogue(ABC):
    """Read-only access to the roles users can be granted."""

    @abstractmethod
    async def list_all_roles(self) -> list[Role]:
        """List every role with its permissions, ordered by name."""

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Role]:
        """Find a role by its name."""

    @abstractmethod
    async def get_member_role(self) -> Role:
        """Return the implicit role every onboarded user receives.

        Raises
        ------
        RoleNotFoundError
            If the configured member role does not exist
        """
