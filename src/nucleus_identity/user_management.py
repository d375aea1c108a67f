"""User management entry point.

Wires the lifecycle commands and directory queries to SQLAlchemy
repositories. Every call runs in its own session: a succeeded result is
committed, a failed result or an exception rolls the whole call back, so
identity changes and role links are stored together or not at all.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Optional, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nucleus_identity.application.commands import (
    CreateUserCommand,
    EditUserCommand,
    GrantMemberRoleCommand,
    RemoveUserCommand,
    ReplaceUserRolesCommand,
)
from nucleus_identity.application.dtos import (
    PagedResult,
    UserForCreateOrUpdateDTO,
    UserListItemDTO,
)
from nucleus_identity.application.factories import IdentityRepositoryFactory
from nucleus_identity.application.queries import (
    GetUserForCreateOrUpdateQuery,
    ListUsersQuery,
)
from nucleus_identity.application.services import AccountManager
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyIdentityRepositoryFactory,
)
from nucleus_identity.results import IdentityResult
from nucleus_identity.schemas import CreateOrUpdateUserInput, UserListInput
from nucleus_identity.services import PasswordHashingService

if TYPE_CHECKING:
    from nucleus_config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserManagementService:
    """List, create, edit and remove users and manage their roles."""

    def __init__(  # noqa: PLR0913
        self,
        session_maker: async_sessionmaker[AsyncSession],
        password_service: PasswordHashingService,
        protected_usernames: Iterable[str] = ("admin",),
        member_role_name: str = "member",
        require_unique_email: bool = True,
    ):
        self._session_maker = session_maker
        self._password_service = password_service
        self._protected_usernames = frozenset(protected_usernames)
        self._member_role_name = member_role_name
        self._require_unique_email = require_unique_email

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_maker: Optional[async_sessionmaker[AsyncSession]] = None,
    ) -> UserManagementService:
        if session_maker is None:
            from nucleus_identity.infrastructure.persistence.sqlalchemy.database import (  # noqa: E501
                get_session_maker,
            )

            session_maker = get_session_maker()

        return cls(
            session_maker=session_maker,
            password_service=PasswordHashingService.from_settings(settings),
            protected_usernames=settings.protected_username_set,
            member_role_name=settings.member_role_name,
            require_unique_email=settings.require_unique_email,
        )

    async def get_users(self, list_input: UserListInput) -> PagedResult[UserListItemDTO]:
        async def query(factory: IdentityRepositoryFactory) -> PagedResult[UserListItemDTO]:
            return await ListUsersQuery(factory.user_repository()).execute(
                filter_text=list_input.filter,
                sort_by=list_input.sort_by,
                page_index=list_input.page_index,
                page_size=list_input.page_size,
            )

        return await self._read(query)

    async def get_user_for_create_or_update(
        self,
        user_id: Optional[UUID],
    ) -> UserForCreateOrUpdateDTO:
        async def query(factory: IdentityRepositoryFactory) -> UserForCreateOrUpdateDTO:
            return await GetUserForCreateOrUpdateQuery(
                user_repository=factory.user_repository(),
                role_catalogue=factory.role_catalogue(),
            ).execute(user_id)

        return await self._read(query)

    async def add_user(self, user_input: CreateOrUpdateUserInput) -> IdentityResult:
        async def command(factory: IdentityRepositoryFactory) -> IdentityResult:
            return await CreateUserCommand(
                account_manager=self._account_manager(factory),
                replace_roles_command=ReplaceUserRolesCommand(factory.user_repository()),
            ).execute(
                username=user_input.user.username,
                email=user_input.user.email,
                password=user_input.user.password or "",
                granted_role_ids=user_input.granted_role_ids,
                user_id=user_input.user.id,
            )

        return await self._write("add_user", command)

    async def edit_user(self, user_input: CreateOrUpdateUserInput) -> IdentityResult:
        async def command(factory: IdentityRepositoryFactory) -> IdentityResult:
            return await EditUserCommand(
                user_repository=factory.user_repository(),
                account_manager=self._account_manager(factory),
                replace_roles_command=ReplaceUserRolesCommand(factory.user_repository()),
            ).execute(
                user_id=user_input.user.id,
                username=user_input.user.username,
                email=user_input.user.email,
                password=user_input.user.password,
                granted_role_ids=user_input.granted_role_ids,
            )

        return await self._write("edit_user", command)

    async def remove_user(self, user_id: UUID) -> IdentityResult:
        async def command(factory: IdentityRepositoryFactory) -> IdentityResult:
            return await RemoveUserCommand(
                user_repository=factory.user_repository(),
                account_manager=self._account_manager(factory),
                protected_usernames=self._protected_usernames,
            ).execute(user_id)

        return await self._write("remove_user", command)

    async def grant_member_role_to_user(self, email: str) -> IdentityResult:
        async def command(factory: IdentityRepositoryFactory) -> IdentityResult:
            return await GrantMemberRoleCommand(
                user_repository=factory.user_repository(),
                role_catalogue=factory.role_catalogue(),
                replace_roles_command=ReplaceUserRolesCommand(factory.user_repository()),
            ).execute(email)

        return await self._write("grant_member_role_to_user", command)

    def _account_manager(self, factory: IdentityRepositoryFactory) -> AccountManager:
        return AccountManager(
            user_repository=factory.user_repository(),
            credential_repository=factory.credential_repository(),
            password_service=self._password_service,
            require_unique_email=self._require_unique_email,
        )

    def _factory(self, session: AsyncSession) -> SQLAlchemyIdentityRepositoryFactory:
        return SQLAlchemyIdentityRepositoryFactory(
            session,
            member_role_name=self._member_role_name,
        )

    async def _read(
        self,
        query: Callable[[IdentityRepositoryFactory], Awaitable[T]],
    ) -> T:
        async with self._session_maker() as session:
            return await query(self._factory(session))

    async def _write(
        self,
        operation: str,
        command: Callable[[IdentityRepositoryFactory], Awaitable[IdentityResult]],
    ) -> IdentityResult:
        async with self._session_maker() as session:
            factory = self._factory(session)
            try:
                result = await command(factory)
            except Exception:
                await factory.rollback()
                logger.exception("%s failed, changes rolled back", operation)
                raise

            if result.succeeded:
                await factory.commit()
                logger.debug("%s committed", operation)
            else:
                await factory.rollback()
                logger.info("%s rejected: %s", operation, ", ".join(result.error_codes))

            return result
