from dataclasses import dataclass, field
from uuid import UUID

from nucleus_identity.domain.role.entities.permission import Permission


@dataclass(frozen=True)
class Role:
    """Named bundle of permissions, shared by many users."""

    id: UUID
    name: str
    permissions: tuple[Permission, ...] = field(default_factory=tuple)

    @property
    def permission_names(self) -> list[str]:
        return sorted(p.name for p in self.permissions)
