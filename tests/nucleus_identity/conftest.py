"""
Pytest configuration for nucleus_identity tests.

Provides domain objects for unit tests and a seeded in-memory database
for persistence and end-to-end tests.
"""

from uuid import uuid4

import pytest
import pytest_asyncio

from nucleus_config import Settings
from nucleus_identity.domain.role import Permission, Role
from nucleus_identity.domain.user import User
from nucleus_identity.infrastructure.persistence.sqlalchemy.repositories import (
    RoleCatalogueSQLAlchemy,
)
from nucleus_identity.seed import seed_defaults
from nucleus_identity.services import PasswordHashingService
from tests.shared.fixtures.database import (
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)

__all__ = [
    "sqlite_engine",
    "sqlite_session",
    "sqlite_session_maker",
]

ADMIN_PASSWORD = "Admin-pa55"


@pytest.fixture
def password_service() -> PasswordHashingService:
    """Default policy with low rounds for fast tests."""
    return PasswordHashingService(rounds=4)


@pytest.fixture
def short_password_service() -> PasswordHashingService:
    """Accepts five-character passwords such as ``Pwd1!``."""
    return PasswordHashingService(rounds=4, min_length=5)


@pytest.fixture
def test_user() -> User:
    """Create a standard test user."""
    return User.create("alice", "alice@example.com")


@pytest.fixture
def member_role() -> Role:
    return Role(
        id=uuid4(),
        name="member",
        permissions=(Permission(id=uuid4(), name="users.view"),),
    )


@pytest.fixture
def admin_role() -> Role:
    return Role(
        id=uuid4(),
        name="admin",
        permissions=(
            Permission(id=uuid4(), name="users.edit"),
            Permission(id=uuid4(), name="users.view"),
        ),
    )


@pytest.fixture
def seed_settings() -> Settings:
    """Settings independent of any .env file, with an admin password."""
    return Settings(
        _env_file=None,
        database_url_override="sqlite+aiosqlite:///:memory:",
        bcrypt_rounds=4,
        default_admin_password=ADMIN_PASSWORD,
    )


@pytest_asyncio.fixture
async def seeded_roles(sqlite_session_maker, seed_settings, password_service):
    """Seed default data and return the roles by name."""
    await seed_defaults(sqlite_session_maker, seed_settings, password_service)

    async with sqlite_session_maker() as session:
        roles = await RoleCatalogueSQLAlchemy(session).list_all_roles()

    return {role.name: role for role in roles}
