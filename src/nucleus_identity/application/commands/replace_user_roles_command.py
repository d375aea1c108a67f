import logging
from collections.abc import Iterable
from uuid import UUID

from nucleus_identity.domain.user import User, UserRepository

logger = logging.getLogger(__name__)


class ReplaceUserRolesCommand:
    """Replace a user's granted roles with exactly the given set.

    Existing links are always discarded first; there is no incremental diff.
    """

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, user: User, role_ids: Iterable[UUID]) -> None:
        user.replace_roles(role_ids)
        await self._user_repo.replace_roles(user.id, user.granted_role_ids)
        logger.info(
            "Replaced roles of user %s with %s",
            user.id,
            [str(role_id) for role_id in user.granted_role_ids],
        )
