"""Email value object.

Addresses are compared and stored lower-cased without surrounding
whitespace, so lookups by email are case-insensitive.
"""

import re
from dataclasses import dataclass

from nucleus_identity.domain.user.exceptions import InvalidEmailError

# local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")
EMAIL_MAX_LENGTH = 256


def normalize_email(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class Email:
    """A validated, normalized email address."""

    value: str

    def __post_init__(self) -> None:
        normalized = normalize_email(self.value or "")

        if not normalized:
            raise InvalidEmailError("Email cannot be empty")
        if len(normalized) > EMAIL_MAX_LENGTH:
            raise InvalidEmailError(
                f"Email cannot exceed {EMAIL_MAX_LENGTH} characters",
            )
        if not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError(f"Invalid email format: {self.value}")

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
