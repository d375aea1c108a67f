from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from nucleus_identity.application.commands.replace_user_roles_command import (
    ReplaceUserRolesCommand,
)
from nucleus_identity.application.services.account_manager import AccountManager
from nucleus_identity.domain.user import User
from nucleus_identity.results import IdentityResult


class CreateUserCommand:
    """Command to create a new user and grant its initial roles."""

    def __init__(
        self,
        account_manager: AccountManager,
        replace_roles_command: ReplaceUserRolesCommand,
    ):
        self._account_manager = account_manager
        self._replace_roles = replace_roles_command

    async def execute(  # noqa: PLR0913
        self,
        username: str,
        email: str,
        password: str,
        granted_role_ids: Iterable[UUID] = (),
        user_id: Optional[UUID] = None,
    ) -> IdentityResult:
        user = User.create(username, email, id=user_id)

        result = await self._account_manager.create_account(user, password)
        if not result.succeeded:
            return result

        await self._replace_roles.execute(user, granted_role_ids)
        return result
