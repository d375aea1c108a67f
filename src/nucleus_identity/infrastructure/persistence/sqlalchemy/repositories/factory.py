"""SQLAlchemy repository factory bound to one session."""

from sqlalchemy.ext.asyncio import AsyncSession

from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.role_catalogue import (  # noqa: E501
    RoleCatalogueSQLAlchemy,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.user_credential_repository import (  # noqa: E501
    UserCredentialRepositorySQLAlchemy,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)


class SQLAlchemyIdentityRepositoryFactory:
    """SQLAlchemy implementation of the IdentityRepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession, member_role_name: str = "member"):
        self._session = session
        self._member_role_name = member_role_name

        # Cached instances (created on demand)
        self._user_repo: UserRepositorySQLAlchemy | None = None
        self._credential_repo: UserCredentialRepositorySQLAlchemy | None = None
        self._role_catalogue: RoleCatalogueSQLAlchemy | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    def user_repository(self) -> UserRepositorySQLAlchemy:
        if self._user_repo is None:
            self._user_repo = UserRepositorySQLAlchemy(self._session)
        return self._user_repo

    def credential_repository(self) -> UserCredentialRepositorySQLAlchemy:
        if self._credential_repo is None:
            self._credential_repo = UserCredentialRepositorySQLAlchemy(self._session)
        return self._credential_repo

    def role_catalogue(self) -> RoleCatalogueSQLAlchemy:
        if self._role_catalogue is None:
            self._role_catalogue = RoleCatalogueSQLAlchemy(
                self._session,
                member_role_name=self._member_role_name,
            )
        return self._role_catalogue

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
