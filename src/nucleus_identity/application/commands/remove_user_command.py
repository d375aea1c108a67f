import logging
from collections.abc import Iterable
from uuid import UUID

from nucleus_identity.application.services.account_manager import AccountManager
from nucleus_identity.domain.user import UserRepository
from nucleus_identity.results import (
    CANNOT_REMOVE_SYSTEM_USER,
    USER_NOT_FOUND,
    IdentityResult,
)

logger = logging.getLogger(__name__)


class RemoveUserCommand:
    """Command to remove a user that is not a protected system account."""

    def __init__(
        self,
        user_repository: UserRepository,
        account_manager: AccountManager,
        protected_usernames: Iterable[str],
    ):
        self._user_repo = user_repository
        self._account_manager = account_manager
        self._protected_usernames = frozenset(
            name.lower() for name in protected_usernames
        )

    @property
    def protected_usernames(self) -> frozenset[str]:
        return self._protected_usernames

    async def execute(self, user_id: UUID) -> IdentityResult:
        user = await self._user_repo.find_by_id_with_roles(user_id)
        if user is None:
            return IdentityResult.failed(USER_NOT_FOUND)

        if user.username.lower() in self._protected_usernames:
            logger.warning("Refused to remove system user %s", user.username)
            return IdentityResult.failed(CANNOT_REMOVE_SYSTEM_USER)

        result = await self._account_manager.delete_account(user)
        if not result.succeeded:
            return result

        user.clear_roles()
        return result
