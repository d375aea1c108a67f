"""Identity services - password hashing."""

from nucleus_identity.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
]
