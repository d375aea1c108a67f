"""List users with a filter, an allow-listed order and a page window."""

from typing import Optional

from nucleus_identity.application.dtos import PagedResult, UserListItemDTO
from nucleus_identity.domain.user import UserRepository, UserSort


class ListUsersQuery:
    """Paged, filterable user directory listing."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(
        self,
        filter_text: Optional[str] = None,
        sort_by: Optional[str] = None,
        page_index: int = 0,
        page_size: int = 10,
    ) -> PagedResult[UserListItemDTO]:
        """Return page ``page_index`` (0-based) of the matching users.

        Raises
        ------
        InvalidSortKeyError
            If ``sort_by`` names a field outside the allow-list
        ValueError
            If the page window is negative or empty
        """
        if page_index < 0 or page_size < 1:
            msg = f"Invalid page window: index={page_index}, size={page_size}"
            raise ValueError(msg)

        sort = UserSort.parse(sort_by)
        filter_value = filter_text.strip() if filter_text else None

        users, total = await self._user_repo.list_page(
            filter_text=filter_value or None,
            sort=sort,
            offset=page_index * page_size,
            limit=page_size,
        )

        return PagedResult(
            items=[UserListItemDTO.from_user(user) for user in users],
            total_count=total,
            page_index=page_index,
            page_size=page_size,
        )
