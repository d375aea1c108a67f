"""SQLAlchemy implementation of UserRepository."""

import logging
from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from nucleus_identity.domain.shared.time import as_utc
from nucleus_identity.domain.user import (
    User,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserRepository,
    UserRole,
    UserSort,
    UserSortField,
    normalize_email,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    RolePermissionModel,
    UserModel,
    UserRoleModel,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories.role_catalogue import (  # noqa: E501
    map_role_to_domain,
)

logger = logging.getLogger(__name__)

# user -> role links -> role -> role/permission links -> permission
USER_WITH_ROLES_AND_PERMISSIONS = (
    selectinload(UserModel.user_roles)
    .selectinload(UserRoleModel.role)
    .selectinload(RoleModel.role_permissions)
    .selectinload(RolePermissionModel.permission)
)

SORT_COLUMNS = {
    UserSortField.USERNAME: UserModel.username,
    UserSortField.EMAIL: UserModel.email,
    UserSortField.ID: UserModel.id,
}


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self._find_model_by_id(user_id)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_id_with_roles(self, user_id: UUID) -> User | None:
        return await self._find_one_with_roles(
            self._with_roles().where(UserModel.id == user_id),
        )

    async def find_by_email_with_roles(self, email: str) -> User | None:
        return await self._find_one_with_roles(
            self._with_roles().where(UserModel.email == normalize_email(email)),
        )

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == normalize_email(email))
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_username(self, username: str) -> User | None:
        stmt = select(UserModel).where(
            func.lower(UserModel.username) == username.strip().lower(),
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def list_page(
        self,
        filter_text: Optional[str],
        sort: UserSort,
        offset: int,
        limit: int,
    ) -> tuple[list[User], int]:
        stmt = select(UserModel)
        if filter_text:
            pattern = _like_pattern(filter_text)
            stmt = stmt.where(
                or_(
                    UserModel.username.ilike(pattern, escape="\\"),
                    UserModel.email.ilike(pattern, escape="\\"),
                ),
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self._session.execute(count_stmt)).scalar_one()

        column = SORT_COLUMNS[sort.field]
        order = column.desc() if sort.descending else column.asc()
        page_stmt = stmt.order_by(order, UserModel.id).offset(offset).limit(limit)

        result = await self._session.execute(page_stmt)
        users = [self._map_to_domain(model) for model in result.scalars().all()]
        return users, total

    async def add(self, user: User) -> None:
        if await self._find_model_by_id(user.id) is not None:
            raise UserAlreadyExistsError(user.username)

        self._session.add(self._map_to_model(user))
        await self._flush(user)
        logger.info("Created user: %s (username: %s)", user.id, user.username)

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)
        if existing is None:
            raise UserNotFoundError(str(user.id))

        self._update_model(existing, user)
        await self._flush(user)
        logger.debug("Updated user: %s", user.id)

    async def _flush(self, user: User) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise UserAlreadyExistsError(user.username) from e

    async def replace_roles(self, user_id: UUID, role_ids: Iterable[UUID]) -> None:
        stmt = (
            select(UserModel)
            .options(selectinload(UserModel.user_roles))
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            raise UserNotFoundError(str(user_id))

        # Removed links must be flushed before re-inserting the same pairs
        model.user_roles.clear()
        await self._session.flush()

        unique_ids = list(dict.fromkeys(role_ids))
        model.user_roles.extend(
            UserRoleModel(user_id=user_id, role_id=role_id) for role_id in unique_ids
        )
        await self._session.flush()
        logger.debug("Granted %d role(s) to user %s", len(unique_ids), user_id)

    async def delete(self, user_id: UUID) -> None:
        stmt = (
            select(UserModel)
            .options(selectinload(UserModel.user_roles))
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            await self._session.delete(model)
            await self._session.flush()
            logger.info("Deleted user: %s", user_id)

    def _with_roles(self) -> Select[tuple[UserModel]]:
        return (
            select(UserModel)
            .options(USER_WITH_ROLES_AND_PERMISSIONS)
            .execution_options(populate_existing=True)
        )

    async def _find_one_with_roles(self, stmt: Select[tuple[UserModel]]) -> User | None:
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._map_to_domain(model, with_roles=True)

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel, with_roles: bool = False) -> User:
        user_roles: list[UserRole] = []
        if with_roles:
            user_roles = [
                UserRole(
                    user_id=link.user_id,
                    role_id=link.role_id,
                    role=map_role_to_domain(link.role),
                )
                for link in model.user_roles
            ]

        return User.reconstitute(
            id=model.id,
            username=model.username,
            email=model.email,
            security_stamp=model.security_stamp,
            user_roles=user_roles,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            security_stamp=user.security_stamp,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.username = user.username
        model.email = user.email
        model.security_stamp = user.security_stamp
        model.updated_at = user.updated_at
