import logging

from nucleus_identity.application.commands.replace_user_roles_command import (
    ReplaceUserRolesCommand,
)
from nucleus_identity.domain.role import RoleCatalogue
from nucleus_identity.domain.user import UserRepository
from nucleus_identity.results import USER_NOT_FOUND, IdentityResult

logger = logging.getLogger(__name__)


class GrantMemberRoleCommand:
    """Enroll a user, found by email, into the member role.

    Uses the replace-all primitive: afterwards the member role is the only
    role the user holds.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        role_catalogue: RoleCatalogue,
        replace_roles_command: ReplaceUserRolesCommand,
    ):
        self._user_repo = user_repository
        self._role_catalogue = role_catalogue
        self._replace_roles = replace_roles_command

    async def execute(self, email: str) -> IdentityResult:
        user = await self._user_repo.find_by_email_with_roles(email)
        if user is None:
            logger.warning("No user with email %s to enroll as member", email)
            return IdentityResult.failed(USER_NOT_FOUND)

        role = await self._role_catalogue.get_member_role()

        await self._replace_roles.execute(user, [role.id])
        return IdentityResult.success()
