"""Persistence tests for UserCredentialRepositorySQLAlchemy."""

import pytest

from nucleus_identity.domain.user import User
from nucleus_identity.infrastructure.persistence.sqlalchemy import (
    UserCredentialRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)


@pytest.fixture
def credential_repo(sqlite_session):
    return UserCredentialRepositorySQLAlchemy(sqlite_session)


class TestUserCredentialRepository:
    @pytest.mark.asyncio
    async def test_save_and_find(self, credential_repo, sqlite_session):
        user = User.create("alice", "alice@example.com")
        await UserRepositorySQLAlchemy(sqlite_session).add(user)

        await credential_repo.save(user_id=user.id, password_hash="hash-1")
        found = await credential_repo.find_by_user_id(user.id)

        assert found is not None
        assert found.user_id == user.id
        assert found.password_hash == "hash-1"

    @pytest.mark.asyncio
    async def test_save_again_updates_hash(self, credential_repo, sqlite_session):
        user = User.create("alice", "alice@example.com")
        await UserRepositorySQLAlchemy(sqlite_session).add(user)

        await credential_repo.save(user_id=user.id, password_hash="hash-1")
        await credential_repo.save(user_id=user.id, password_hash="hash-2")

        assert (await credential_repo.find_by_user_id(user.id)).password_hash == "hash-2"

    @pytest.mark.asyncio
    async def test_delete(self, credential_repo, sqlite_session):
        user = User.create("alice", "alice@example.com")
        await UserRepositorySQLAlchemy(sqlite_session).add(user)
        await credential_repo.save(user_id=user.id, password_hash="hash-1")

        assert await credential_repo.delete(user.id) is True
        assert await credential_repo.find_by_user_id(user.id) is None
        assert await credential_repo.delete(user.id) is False
