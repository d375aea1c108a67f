"""Identity exceptions.

Business outcomes of the user lifecycle are reported as ``IdentityResult``.
The exceptions below cover the remaining cases: password policy violations
(raised by the hashing service and converted to results by the account
manager), unusable query input and missing configuration data.
"""

from nucleus_identity.results import IdentityErrorCode


class IdentityServiceError(Exception):
    """Base exception for the identity package."""

    def __init__(self, message: str = "Identity error"):
        self.message = message
        super().__init__(self.message)


class WeakPasswordError(IdentityServiceError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(
        self,
        message: str = "Password does not meet requirements",
        code: IdentityErrorCode = IdentityErrorCode.PASSWORD_TOO_SHORT,
    ):
        self.code = code
        super().__init__(message)


class RoleNotFoundError(IdentityServiceError):
    """Raised when a role required by configuration does not exist."""

    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"Role not found: {role_name}")
