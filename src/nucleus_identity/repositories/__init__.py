"""Abstract repository interfaces for credential storage."""

from nucleus_identity.repositories.user_credential_repository import (
    UserCredentialData,
    UserCredentialRepository,
)

__all__ = [
    "UserCredentialData",
    "UserCredentialRepository",
]
