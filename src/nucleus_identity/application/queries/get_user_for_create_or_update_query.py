"""Load what a create or edit form needs."""

import logging
from typing import Optional
from uuid import UUID

from nucleus_identity.application.dtos import (
    RoleDTO,
    UserDetailDTO,
    UserForCreateOrUpdateDTO,
)
from nucleus_identity.domain.role import RoleCatalogue
from nucleus_identity.domain.user import (
    NIL_USER_ID,
    UserNotFoundError,
    UserRepository,
)

logger = logging.getLogger(__name__)


class GetUserForCreateOrUpdateQuery:
    """Role catalogue plus, for an existing user, its details and granted roles."""

    def __init__(
        self,
        user_repository: UserRepository,
        role_catalogue: RoleCatalogue,
    ):
        self._user_repo = user_repository
        self._role_catalogue = role_catalogue

    async def execute(self, user_id: Optional[UUID]) -> UserForCreateOrUpdateDTO:
        """Build the form data.

        A missing or nil ``user_id`` means a create form: only the catalogue
        is returned.

        Raises
        ------
        UserNotFoundError
            If ``user_id`` is set but no such user exists
        """
        all_roles = [
            RoleDTO.from_role(role)
            for role in await self._role_catalogue.list_all_roles()
        ]

        if user_id is None or user_id == NIL_USER_ID:
            return UserForCreateOrUpdateDTO(all_roles=all_roles)

        user = await self._user_repo.find_by_id_with_roles(user_id)
        if user is None:
            logger.debug("User %s requested for editing does not exist", user_id)
            raise UserNotFoundError(str(user_id))

        return UserForCreateOrUpdateDTO(
            all_roles=all_roles,
            user=UserDetailDTO.from_user(user),
            granted_role_ids=user.granted_role_ids,
        )
