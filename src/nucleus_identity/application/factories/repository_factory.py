"""Repository factory protocol for one unit of work."""

from typing import Protocol

from nucleus_identity.domain.role import RoleCatalogue
from nucleus_identity.domain.user import UserRepository
from nucleus_identity.repositories import UserCredentialRepository


class IdentityRepositoryFactory(Protocol):
    """Hands out repositories bound to the same unit of work."""

    def user_repository(self) -> UserRepository: ...

    def credential_repository(self) -> UserCredentialRepository: ...

    def role_catalogue(self) -> RoleCatalogue: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
