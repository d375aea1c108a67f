"""Settings for the identity service.

Values come from, highest priority first: process environment, the file
named by ``NUCLEUS_ENV_FILE``, ``config/.env.dev``, ``config/.env`` and
finally the defaults below.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "NUCLEUS_ENV_FILE"
ENV_FILE_CANDIDATES = (".env.dev", ".env")


def project_root() -> Path:
    """Nearest ancestor holding ``config/`` or ``pyproject.toml``."""
    here = Path(__file__).resolve()
    for directory in here.parents:
        if (directory / "config").is_dir() or (directory / "pyproject.toml").is_file():
            return directory
    return here.parents[2]


def get_config_dir() -> Path:
    return project_root() / "config"


def discover_env_file() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = project_root() / path
        if path.is_file():
            return path

    config_dir = get_config_dir()
    for name in ENV_FILE_CANDIDATES:
        candidate = config_dir / name
        if candidate.is_file():
            return candidate
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=discover_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Nucleus"
    debug: bool = False
    log_level: str = "INFO"

    # Storage. DATABASE_URL_OVERRIDE (any async URL) replaces POSTGRES_*.
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "nucleus"
    database_url_override: str | None = None

    # Password hashing and strength rules
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    password_min_length: int = Field(default=8, ge=1)
    password_max_length: int = Field(default=128, ge=1)
    password_require_digit: bool = True
    password_require_lowercase: bool = True
    password_require_uppercase: bool = True
    password_require_non_alphanumeric: bool = True

    # Accounts and roles
    require_unique_email: bool = True
    member_role_name: str = "member"
    admin_role_name: str = "admin"
    protected_usernames: str = "admin"
    default_admin_username: str = "admin"
    default_admin_email: str = "admin@nucleus.local"
    default_admin_password: SecretStr | None = None

    @field_validator("protected_usernames", mode="before")
    @classmethod
    def _join_protected_usernames(cls, value: Any) -> str:
        # env gives "a,b"; code may pass any collection of names
        if isinstance(value, (list, tuple, set, frozenset)):
            return ",".join(value)
        return str(value) if value else ""

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def _check_password_lengths(self) -> Settings:
        if self.password_min_length > self.password_max_length:
            raise ValueError("password_min_length exceeds password_max_length")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def protected_username_set(self) -> frozenset[str]:
        """Accounts that can never be removed."""
        names = (name.strip() for name in self.protected_usernames.split(","))
        return frozenset(name for name in names if name)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
