from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Permission:
    """Leaf capability granted through roles. Read-only for user management."""

    id: UUID
    name: str
    display_name: str | None = None
