"""Persistence tests for UserRepositorySQLAlchemy on in-memory SQLite."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy import func, select

from nucleus_identity.domain.user import (
    SortDirection,
    User,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserSort,
    UserSortField,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)
from nucleus_identity.infrastructure.persistence.sqlalchemy.models import (
    UserRoleModel,
)


@pytest.fixture
def user_repo(sqlite_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(sqlite_session)


async def _add_users(repo, *names: str) -> list[User]:
    users = [User.create(name, f"{name}@example.com") for name in names]
    for user in users:
        await repo.add(user)
    return users


async def _link_count(session, user_id: UUID) -> int:
    result = await session.execute(
        select(func.count()).select_from(UserRoleModel).where(
            UserRoleModel.user_id == user_id,
        ),
    )
    return result.scalar_one()


class TestLookups:
    @pytest.mark.asyncio
    async def test_add_and_find_by_id(self, user_repo):
        user = User.create("alice", "alice@example.com")

        await user_repo.add(user)
        found = await user_repo.find_by_id(user.id)

        assert found is not None
        assert found.id == user.id
        assert isinstance(found.id, UUID)
        assert found.username == "alice"
        assert found.security_stamp == user.security_stamp

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        assert await user_repo.find_by_id(uuid4()) is None
        assert await user_repo.find_by_id_with_roles(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_username_is_case_insensitive(self, user_repo):
        await _add_users(user_repo, "alice")

        found = await user_repo.find_by_username("ALICE")

        assert found is not None
        assert found.username == "alice"

    @pytest.mark.asyncio
    async def test_find_by_email_is_case_insensitive(self, user_repo):
        await _add_users(user_repo, "alice")

        assert await user_repo.find_by_email("Alice@Example.com") is not None
        assert await user_repo.find_by_email_with_roles("ALICE@example.com") is not None
        assert await user_repo.find_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_save_updates_existing_user(self, user_repo):
        (user,) = await _add_users(user_repo, "alice")

        user.change_username("alice2")
        user.change_email("alice2@example.com")
        await user_repo.save(user)

        found = await user_repo.find_by_id(user.id)
        assert found.username == "alice2"
        assert found.email == "alice2@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_user_name_raises(self, user_repo):
        await _add_users(user_repo, "alice")

        with pytest.raises(UserAlreadyExistsError):
            await user_repo.add(User.create("alice", "other@example.com"))

    @pytest.mark.asyncio
    async def test_add_never_overwrites_existing_id(self, user_repo):
        (alice,) = await _add_users(user_repo, "alice")

        with pytest.raises(UserAlreadyExistsError):
            await user_repo.add(
                User.create("mallory", "mallory@example.com", id=alice.id),
            )

        found = await user_repo.find_by_id(alice.id)
        assert found.username == "alice"
        assert found.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_save_never_inserts(self, user_repo):
        ghost = User.create("ghost", "ghost@example.com")

        with pytest.raises(UserNotFoundError):
            await user_repo.save(ghost)

        assert await user_repo.find_by_id(ghost.id) is None


class TestListPage:
    @pytest.mark.asyncio
    async def test_default_order_is_username_ascending(self, user_repo):
        await _add_users(user_repo, "carol", "alice", "bob")

        users, total = await user_repo.list_page(None, UserSort(), 0, 10)

        assert [u.username for u in users] == ["alice", "bob", "carol"]
        assert total == 3

    @pytest.mark.asyncio
    async def test_descending_email_order(self, user_repo):
        await _add_users(user_repo, "carol", "alice", "bob")

        users, _ = await user_repo.list_page(
            None,
            UserSort(UserSortField.EMAIL, SortDirection.DESC),
            0,
            10,
        )

        assert [u.email for u in users] == [
            "carol@example.com",
            "bob@example.com",
            "alice@example.com",
        ]

    @pytest.mark.asyncio
    async def test_id_order(self, user_repo):
        saved = await _add_users(user_repo, "alice", "bob", "carol")

        users, _ = await user_repo.list_page(
            None,
            UserSort(UserSortField.ID),
            0,
            10,
        )

        assert [u.id for u in users] == sorted(u.id for u in saved)

    @pytest.mark.asyncio
    async def test_total_counts_all_matches_not_the_page(self, user_repo):
        await _add_users(user_repo, "alice", "alicia", "bob", "malik")

        users, total = await user_repo.list_page("ali", UserSort(), 0, 2)

        assert [u.username for u in users] == ["alice", "alicia"]
        assert total == 3

    @pytest.mark.asyncio
    async def test_filter_is_case_insensitive_on_username_or_email(self, user_repo):
        await _add_users(user_repo, "alice", "bob")
        other = User.create("carol", "carol@ALIEN.example.com")
        await user_repo.add(other)

        users, total = await user_repo.list_page("ALI", UserSort(), 0, 10)

        assert {u.username for u in users} == {"alice", "carol"}
        assert total == 2

    @pytest.mark.asyncio
    async def test_filter_wildcards_are_literal(self, user_repo):
        await _add_users(user_repo, "a_b", "axb", "100%")

        underscore, _ = await user_repo.list_page("_", UserSort(), 0, 10)
        percent, _ = await user_repo.list_page("%", UserSort(), 0, 10)

        assert [u.username for u in underscore] == ["a_b"]
        assert [u.username for u in percent] == ["100%"]

    @pytest.mark.asyncio
    async def test_offset_past_end_returns_empty_page_with_total(self, user_repo):
        await _add_users(user_repo, "alice", "bob")

        users, total = await user_repo.list_page(None, UserSort(), 10, 10)

        assert users == []
        assert total == 2


class TestRoleLinks:
    @pytest.mark.asyncio
    async def test_replace_roles_and_load_with_permissions(
        self,
        seeded_roles,
        user_repo,
    ):
        (user,) = await _add_users(user_repo, "alice")
        member = seeded_roles["member"]

        await user_repo.replace_roles(user.id, [member.id])
        found = await user_repo.find_by_id_with_roles(user.id)

        assert found.granted_role_ids == [member.id]
        assert [role.name for role in found.roles] == ["member"]
        assert found.permission_names == {"users.view"}

    @pytest.mark.asyncio
    async def test_replace_roles_discards_previous_links(
        self,
        seeded_roles,
        user_repo,
        sqlite_session,
    ):
        (user,) = await _add_users(user_repo, "alice")
        admin, member = seeded_roles["admin"], seeded_roles["member"]
        await user_repo.replace_roles(user.id, [admin.id, member.id])

        await user_repo.replace_roles(user.id, [member.id])

        found = await user_repo.find_by_id_with_roles(user.id)
        assert found.granted_role_ids == [member.id]
        assert await _link_count(sqlite_session, user.id) == 1

    @pytest.mark.asyncio
    async def test_replace_roles_with_same_set_twice(
        self,
        seeded_roles,
        user_repo,
        sqlite_session,
    ):
        (user,) = await _add_users(user_repo, "alice")
        role_ids = [seeded_roles["admin"].id, seeded_roles["member"].id]

        await user_repo.replace_roles(user.id, role_ids)
        await user_repo.replace_roles(user.id, role_ids)

        assert await _link_count(sqlite_session, user.id) == 2

    @pytest.mark.asyncio
    async def test_replace_roles_collapses_duplicates(
        self,
        seeded_roles,
        user_repo,
        sqlite_session,
    ):
        (user,) = await _add_users(user_repo, "alice")
        member = seeded_roles["member"]

        await user_repo.replace_roles(user.id, [member.id, member.id])

        assert await _link_count(sqlite_session, user.id) == 1

    @pytest.mark.asyncio
    async def test_replace_roles_with_empty_set(
        self,
        seeded_roles,
        user_repo,
        sqlite_session,
    ):
        (user,) = await _add_users(user_repo, "alice")
        await user_repo.replace_roles(user.id, [seeded_roles["member"].id])

        await user_repo.replace_roles(user.id, [])

        assert await _link_count(sqlite_session, user.id) == 0

    @pytest.mark.asyncio
    async def test_replace_roles_for_unknown_user(self, user_repo):
        with pytest.raises(UserNotFoundError):
            await user_repo.replace_roles(uuid4(), [])

    @pytest.mark.asyncio
    async def test_delete_removes_user_and_links(
        self,
        seeded_roles,
        user_repo,
        sqlite_session,
    ):
        (user,) = await _add_users(user_repo, "alice")
        await user_repo.replace_roles(user.id, [seeded_roles["member"].id])

        await user_repo.delete(user.id)

        assert await user_repo.find_by_id(user.id) is None
        assert await _link_count(sqlite_session, user.id) == 0
