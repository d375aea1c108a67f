"""SQLAlchemy implementation of UserCredentialRepository."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from nucleus_identity.domain.shared.time import as_utc, utc_now
from nucleus_identity.infrastructure.persistence.sqlalchemy.models import (
    UserCredentialModel,
)
from nucleus_identity.repositories import UserCredentialData, UserCredentialRepository

logger = logging.getLogger(__name__)


def _to_data(model: UserCredentialModel) -> UserCredentialData:
    return UserCredentialData(
        user_id=model.user_id,
        password_hash=model.password_hash,
        changed_at=as_utc(model.changed_at),
    )


class UserCredentialRepositorySQLAlchemy(UserCredentialRepository):
    """Credentials stored in the user_credentials table, keyed by user id."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        model = await self._session.get(UserCredentialModel, user_id)

        if model is None:
            model = UserCredentialModel(user_id=user_id, password_hash=password_hash)
            self._session.add(model)
            logger.info("Stored password for user %s", user_id)
        else:
            model.password_hash = password_hash
            model.changed_at = utc_now()
            logger.debug("Replaced password hash of user %s", user_id)

        await self._session.flush()
        return _to_data(model)

    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        model = await self._session.get(
            UserCredentialModel,
            user_id,
            populate_existing=True,
        )
        return _to_data(model) if model else None

    async def delete(self, user_id: UUID) -> bool:
        model = await self._session.get(UserCredentialModel, user_id)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()
        logger.info("Removed password of user %s", user_id)
        return True
