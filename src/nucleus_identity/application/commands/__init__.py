"""Application commands for user lifecycle management."""

from nucleus_identity.application.commands.create_user_command import CreateUserCommand
from nucleus_identity.application.commands.edit_user_command import EditUserCommand
from nucleus_identity.application.commands.grant_member_role_command import (
    GrantMemberRoleCommand,
)
from nucleus_identity.application.commands.remove_user_command import (
    RemoveUserCommand,
)
from nucleus_identity.application.commands.replace_user_roles_command import (
    ReplaceUserRolesCommand,
)

__all__ = [
    "CreateUserCommand",
    "EditUserCommand",
    "GrantMemberRoleCommand",
    "RemoveUserCommand",
    "ReplaceUserRolesCommand",
]
