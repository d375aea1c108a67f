"""Unit tests for application settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from nucleus_config import Settings, clear_settings_cache, configure_logging, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DATABASE_URL_OVERRIDE",
        "POSTGRES_HOST",
        "POSTGRES_PASSWORD",
        "PROTECTED_USERNAMES",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_database_url_from_components(self, clean_env):
        settings = Settings(
            _env_file=None,
            postgres_host="db",
            postgres_port=5433,
            postgres_user="nucleus",
            postgres_password="secret",
            postgres_db="identity",
        )

        assert settings.database_url == (
            "postgresql+asyncpg://nucleus:secret@db:5433/identity"
        )

    def test_database_url_override_wins(self, clean_env):
        settings = Settings(
            _env_file=None,
            database_url_override="sqlite+aiosqlite:///./data/nucleus.db",
        )

        assert settings.database_url == "sqlite+aiosqlite:///./data/nucleus.db"

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.member_role_name == "member"
        assert settings.password_min_length == 8
        assert settings.require_unique_email is True
        assert settings.protected_username_set == frozenset({"admin"})
        assert settings.default_admin_password is None

    def test_protected_usernames_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("PROTECTED_USERNAMES", "admin, root ,")

        settings = Settings(_env_file=None)

        assert settings.protected_username_set == frozenset({"admin", "root"})

    def test_protected_usernames_from_list(self, clean_env):
        settings = Settings(_env_file=None, protected_usernames=["admin", "system"])

        assert settings.protected_username_set == frozenset({"admin", "system"})

    def test_get_settings_is_cached(self):
        clear_settings_cache()

        assert get_settings() is get_settings()

        clear_settings_cache()


class TestConfigureLogging:
    def test_sets_application_level(self, clean_env):
        configure_logging(Settings(_env_file=None, log_level="DEBUG"))

        assert logging.getLogger("nucleus_identity").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        configure_logging(Settings(_env_file=None, log_level="INFO"))


class TestSettingsValidation:
    def test_log_level_is_normalized(self, clean_env):
        settings = Settings(_env_file=None, log_level=" debug ")

        assert settings.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_bcrypt_rounds_out_of_range_rejected(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, bcrypt_rounds=2)

    def test_min_length_above_max_length_rejected(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, password_min_length=20, password_max_length=10)
