import logging
from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from nucleus_identity.application.commands.replace_user_roles_command import (
    ReplaceUserRolesCommand,
)
from nucleus_identity.application.services.account_manager import AccountManager
from nucleus_identity.domain.user import User, UserRepository
from nucleus_identity.results import (
    USER_NAME_ALREADY_EXISTS,
    USER_NOT_FOUND,
    IdentityResult,
)

logger = logging.getLogger(__name__)


class EditUserCommand:
    """Command to edit a user's identity, password and granted roles.

    Every check runs before the first write; a failed step stops the
    command and the remaining steps are skipped.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        account_manager: AccountManager,
        replace_roles_command: ReplaceUserRolesCommand,
    ):
        self._user_repo = user_repository
        self._account_manager = account_manager
        self._replace_roles = replace_roles_command

    async def execute(  # noqa: PLR0913
        self,
        user_id: UUID,
        username: str,
        email: str,
        password: Optional[str],
        granted_role_ids: Iterable[UUID],
    ) -> IdentityResult:
        user = await self._user_repo.find_by_id_with_roles(user_id)
        if user is None:
            return IdentityResult.failed(USER_NOT_FOUND)

        owner = await self._user_repo.find_by_username(username)
        if owner is not None and owner.id != user.id:
            logger.warning(
                "User name %r requested for %s already belongs to %s",
                username,
                user.id,
                owner.id,
            )
            return IdentityResult.failed(USER_NAME_ALREADY_EXISTS)

        if password:
            result = await self._change_password(user, password)
            if not result.succeeded:
                return result

        role_ids = list(granted_role_ids)
        user.change_username(username)
        user.change_email(email)
        user.replace_roles(role_ids)
        user.regenerate_security_stamp()

        result = await self._account_manager.update_account(user)
        if not result.succeeded:
            return result

        await self._replace_roles.execute(user, role_ids)
        logger.info("Edited user %s", user.id)
        return result

    async def _change_password(self, user: User, password: str) -> IdentityResult:
        result = await self._account_manager.remove_credential(user)
        if result.succeeded:
            result = await self._account_manager.set_credential(user, password)
        return result
