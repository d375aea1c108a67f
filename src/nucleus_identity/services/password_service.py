"""bcrypt password hashing and the configurable password policy."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import bcrypt

from nucleus_identity.exceptions import WeakPasswordError
from nucleus_identity.results import IdentityErrorCode

if TYPE_CHECKING:
    from nucleus_config import Settings

# bcrypt ignores (newer releases reject) input past this many bytes
BCRYPT_MAX_BYTES = 72

# (setting attribute, code, message, passes) for the character-class rules
_CHARACTER_RULES: tuple[
    tuple[str, IdentityErrorCode, str, Callable[[str], bool]], ...
] = (
    (
        "require_digit",
        IdentityErrorCode.PASSWORD_REQUIRES_DIGIT,
        "Password must contain at least one digit",
        lambda password: any(c.isdigit() for c in password),
    ),
    (
        "require_lowercase",
        IdentityErrorCode.PASSWORD_REQUIRES_LOWER,
        "Password must contain at least one lowercase letter",
        lambda password: any(c.islower() for c in password),
    ),
    (
        "require_uppercase",
        IdentityErrorCode.PASSWORD_REQUIRES_UPPER,
        "Password must contain at least one uppercase letter",
        lambda password: any(c.isupper() for c in password),
    ),
    (
        "require_non_alphanumeric",
        IdentityErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC,
        "Password must contain at least one non-alphanumeric character",
        lambda password: not password.isalnum(),
    ),
)


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHashingService:
    """Hashes and checks passwords and enforces the password policy.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("My_secure_pa55word")
    >>> service.verify("My_secure_pa55word", stored)
    True
    >>> service.verify("Other_pa55word", stored)
    False
    """

    def __init__(  # noqa: PLR0913
        self,
        rounds: int = 12,
        min_length: int = 8,
        max_length: int = 128,
        require_digit: bool = True,
        require_lowercase: bool = True,
        require_uppercase: bool = True,
        require_non_alphanumeric: bool = True,
    ):
        """
        Parameters
        ----------
        rounds
            bcrypt work factor (log2 of the iteration count)
        min_length, max_length
            Accepted password length in characters
        require_digit, require_lowercase, require_uppercase, require_non_alphanumeric
            Character classes every password must contain
        """
        self._rounds = rounds
        self.min_length = min_length
        self.max_length = max_length
        self.require_digit = require_digit
        self.require_lowercase = require_lowercase
        self.require_uppercase = require_uppercase
        self.require_non_alphanumeric = require_non_alphanumeric

    @classmethod
    def from_settings(cls, settings: Settings) -> PasswordHashingService:
        return cls(
            rounds=settings.bcrypt_rounds,
            min_length=settings.password_min_length,
            max_length=settings.password_max_length,
            require_digit=settings.password_require_digit,
            require_lowercase=settings.password_require_lowercase,
            require_uppercase=settings.password_require_uppercase,
            require_non_alphanumeric=settings.password_require_non_alphanumeric,
        )

    def hash(self, password: str) -> str:
        """Validate the password against the policy and return its bcrypt hash.

        Raises
        ------
        WeakPasswordError
            With the code of the first rule the password breaks
        """
        self.validate_strength(password)
        digest = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds))
        return digest.decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """True if the password matches; False for a mismatch or a malformed hash."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            return False

    def find_violations(self, password: str) -> list[WeakPasswordError]:
        """Every policy rule the password breaks, in a fixed order."""
        if not password:
            return [
                WeakPasswordError(
                    "Password cannot be empty",
                    IdentityErrorCode.PASSWORD_TOO_SHORT,
                ),
            ]

        violations: list[WeakPasswordError] = []
        if len(password) < self.min_length:
            violations.append(
                WeakPasswordError(
                    f"Password must be at least {self.min_length} characters",
                    IdentityErrorCode.PASSWORD_TOO_SHORT,
                ),
            )
        if len(password) > self.max_length:
            violations.append(
                WeakPasswordError(
                    f"Password cannot exceed {self.max_length} characters",
                    IdentityErrorCode.PASSWORD_TOO_LONG,
                ),
            )
        violations.extend(
            WeakPasswordError(message, code)
            for attribute, code, message, passes in _CHARACTER_RULES
            if getattr(self, attribute) and not passes(password)
        )
        return violations

    def validate_strength(self, password: str) -> None:
        violations = self.find_violations(password)
        if violations:
            raise violations[0]

    def needs_rehash(self, password_hash: str) -> bool:
        """True when the hash was made with another work factor or is unreadable."""
        # $2b$<rounds>$<salt+digest>
        parts = password_hash.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds
