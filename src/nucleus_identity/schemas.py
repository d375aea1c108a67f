"""Input schemas for user management operations.

Validated with pydantic before any store is touched.
"""

from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class UserListInput(BaseModel):
    """Filter, order and page of a user listing.

    ``page_index`` is 0-based.
    """

    filter: Optional[str] = Field(
        default=None,
        description="Substring of user name or email",
    )
    sort_by: Optional[str] = Field(
        default=None,
        description="'username', 'email' or 'id', optionally followed by 'asc'/'desc'",
    )
    page_index: int = Field(default=0, ge=0, description="0-based page number")
    page_size: int = Field(default=10, ge=1, le=1000, description="Items per page")


class UserInput(BaseModel):
    """Identity fields of a user being created or edited."""

    id: UUID = Field(default_factory=uuid4)
    username: str = Field(..., min_length=1, max_length=256)
    email: str = Field(..., min_length=1, max_length=256)
    password: Optional[str] = Field(
        default=None,
        description="Required on create; on edit an empty value keeps the password",
    )


class CreateOrUpdateUserInput(BaseModel):
    """A user plus the exact set of role ids it should be granted."""

    user: UserInput
    granted_role_ids: list[UUID] = Field(default_factory=list)
