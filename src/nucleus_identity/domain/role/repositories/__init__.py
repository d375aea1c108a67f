from nucleus_identity.domain.role.repositories.role_catalogue import RoleCatalogue

__all__ = ["RoleCatalogue"]
