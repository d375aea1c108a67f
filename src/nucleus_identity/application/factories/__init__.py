"""Application factories for repository access."""

from nucleus_identity.application.factories.repository_factory import (
    IdentityRepositoryFactory,
)

__all__ = ["IdentityRepositoryFactory"]
