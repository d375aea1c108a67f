"""SQLAlchemy implementation of RoleCatalogue."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from nucleus_identity.domain.role import Permission, Role, RoleCatalogue
from nucleus_identity.exceptions import RoleNotFoundError
from nucleus_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    RolePermissionModel,
)

logger = logging.getLogger(__name__)

# Role together with its permissions
ROLE_WITH_PERMISSIONS = selectinload(RoleModel.role_permissions).selectinload(
    RolePermissionModel.permission,
)


def map_role_to_domain(model: RoleModel) -> Role:
    """Map a role whose permissions were eagerly loaded."""
    permissions = tuple(
        sorted(
            (
                Permission(
                    id=link.permission.id,
                    name=link.permission.name,
                    display_name=link.permission.display_name,
                )
                for link in model.role_permissions
            ),
            key=lambda p: p.name,
        ),
    )
    return Role(id=model.id, name=model.name, permissions=permissions)


class RoleCatalogueSQLAlchemy(RoleCatalogue):
    """SQLAlchemy implementation of the RoleCatalogue interface."""

    def __init__(self, session: AsyncSession, member_role_name: str = "member"):
        self._session = session
        self._member_role_name = member_role_name

    async def list_all_roles(self) -> list[Role]:
        stmt = select(RoleModel).options(ROLE_WITH_PERMISSIONS).order_by(RoleModel.name)
        result = await self._session.execute(stmt)
        return [map_role_to_domain(model) for model in result.scalars().all()]

    async def find_by_name(self, name: str) -> Optional[Role]:
        stmt = (
            select(RoleModel)
            .options(ROLE_WITH_PERMISSIONS)
            .where(RoleModel.name == name)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return map_role_to_domain(model)

    async def get_member_role(self) -> Role:
        role = await self.find_by_name(self._member_role_name)
        if role is None:
            logger.error("Member role %r is not configured", self._member_role_name)
            raise RoleNotFoundError(self._member_role_name)
        return role
