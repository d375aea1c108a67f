"""Uniform result type for identity operations.

Expected business outcomes (a name already taken, a protected account, a
password rejected by policy) are reported through ``IdentityResult`` rather
than raised. Every failure carries one or more ``IdentityError`` entries with
a stable code and a human-readable description.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IdentityErrorCode(str, Enum):
    """Stable error codes for identity results.

    These codes are part of the public contract. Should not be changed.
    """

    # Lifecycle rules
    USER_NAME_ALREADY_EXISTS = "UserNameAlreadyExists"
    USER_NOT_FOUND = "UserNotFound"
    CANNOT_REMOVE_SYSTEM_USER = "CannotRemoveSystemUser"

    # Credential store
    INVALID_USER_NAME = "InvalidUserName"
    DUPLICATE_USER_ID = "DuplicateUserId"
    DUPLICATE_USER_NAME = "DuplicateUserName"
    INVALID_EMAIL = "InvalidEmail"
    DUPLICATE_EMAIL = "DuplicateEmail"
    PASSWORD_TOO_SHORT = "PasswordTooShort"
    PASSWORD_TOO_LONG = "PasswordTooLong"
    PASSWORD_REQUIRES_DIGIT = "PasswordRequiresDigit"
    PASSWORD_REQUIRES_LOWER = "PasswordRequiresLower"
    PASSWORD_REQUIRES_UPPER = "PasswordRequiresUpper"
    PASSWORD_REQUIRES_NON_ALPHANUMERIC = "PasswordRequiresNonAlphanumeric"
    USER_ALREADY_HAS_PASSWORD = "UserAlreadyHasPassword"
    CONCURRENCY_FAILURE = "ConcurrencyFailure"


@dataclass(frozen=True)
class IdentityError:
    """A single (code, description) failure entry."""

    code: str
    description: str

    @classmethod
    def of(cls, code: IdentityErrorCode, description: str) -> IdentityError:
        return cls(code=code.value, description=description)


@dataclass(frozen=True)
class IdentityResult:
    """Outcome of an identity operation."""

    succeeded: bool
    errors: tuple[IdentityError, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> IdentityResult:
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityError) -> IdentityResult:
        return cls(succeeded=False, errors=tuple(errors))

    @classmethod
    def failure(cls, code: IdentityErrorCode, description: str) -> IdentityResult:
        return cls.failed(IdentityError.of(code, description))

    @property
    def error_codes(self) -> list[str]:
        return [error.code for error in self.errors]

    def has_error(self, code: IdentityErrorCode) -> bool:
        return code.value in self.error_codes

    def __bool__(self) -> bool:
        return self.succeeded

    def __str__(self) -> str:
        if self.succeeded:
            return "Succeeded"
        return "Failed: " + ", ".join(error.code for error in self.errors)


# Canonical failures for the lifecycle rules
USER_NAME_ALREADY_EXISTS = IdentityError.of(
    IdentityErrorCode.USER_NAME_ALREADY_EXISTS,
    "This user name is already taken by another user.",
)
USER_NOT_FOUND = IdentityError.of(
    IdentityErrorCode.USER_NOT_FOUND,
    "User not found.",
)
CANNOT_REMOVE_SYSTEM_USER = IdentityError.of(
    IdentityErrorCode.CANNOT_REMOVE_SYSTEM_USER,
    "System users cannot be removed.",
)
