from nucleus_identity.domain.role.entities.permission import Permission
from nucleus_identity.domain.role.entities.role import Role

__all__ = ["Permission", "Role"]
