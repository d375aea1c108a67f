"""Integration tests for UserManagementService with Testcontainers PostgreSQL."""

from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError

from nucleus_identity import (
    CreateOrUpdateUserInput,
    UserInput,
    UserListInput,
    UserManagementService,
)
from nucleus_identity.seed import seed_defaults


@pytest_asyncio.fixture
async def seeded_service(postgres_session_maker, seed_settings, short_password_service):
    await seed_defaults(postgres_session_maker, seed_settings, short_password_service)
    return UserManagementService(
        session_maker=postgres_session_maker,
        password_service=short_password_service,
        protected_usernames=seed_settings.protected_username_set,
    )


def new_user(username: str, email: str, role_ids=(), user_id=None, password="Pwd1!"):
    user = UserInput(
        id=user_id or uuid4(),
        username=username,
        email=email,
        password=password,
    )
    return CreateOrUpdateUserInput(user=user, granted_role_ids=list(role_ids))


@pytest.mark.integration
class TestUserManagementPostgres:
    @pytest.mark.asyncio
    async def test_create_then_edit_roles(self, seeded_service):
        form = await seeded_service.get_user_for_create_or_update(None)
        role_ids = {role.name: role.id for role in form.all_roles}
        data = new_user("alice", "a@x.com", [role_ids["admin"]])

        assert (await seeded_service.add_user(data)).succeeded
        assert (
            await seeded_service.get_user_for_create_or_update(data.user.id)
        ).granted_role_ids == [role_ids["admin"]]

        result = await seeded_service.grant_member_role_to_user("a@x.com")

        assert result.succeeded
        assert (
            await seeded_service.get_user_for_create_or_update(data.user.id)
        ).granted_role_ids == [role_ids["member"]]

    @pytest.mark.asyncio
    async def test_rename_onto_existing_user_name(self, seeded_service):
        await seeded_service.add_user(new_user("alice", "alice@example.com"))
        bob = new_user("bob", "bob@example.com")
        await seeded_service.add_user(bob)

        result = await seeded_service.edit_user(
            new_user("alice", "bob@example.com", user_id=bob.user.id, password=None),
        )

        assert result.error_codes == ["UserNameAlreadyExists"]
        page = await seeded_service.get_users(UserListInput(filter="bo"))
        assert page.total_count == 1
        assert page.items[0].username == "bob"

    @pytest.mark.asyncio
    async def test_filter_is_case_insensitive(self, seeded_service):
        await seeded_service.add_user(new_user("Bobby", "bobby@example.com"))

        page = await seeded_service.get_users(UserListInput(filter="BOB"))

        assert [item.username for item in page.items] == ["Bobby"]

    @pytest.mark.asyncio
    async def test_system_user_is_protected(self, seeded_service):
        page = await seeded_service.get_users(UserListInput(filter="admin"))

        result = await seeded_service.remove_user(page.items[0].id)

        assert result.error_codes == ["CannotRemoveSystemUser"]

    @pytest.mark.asyncio
    async def test_unknown_role_rolls_back(self, seeded_service):
        data = new_user("carol", "carol@example.com", [uuid4()])

        with pytest.raises(IntegrityError):
            await seeded_service.add_user(data)

        page = await seeded_service.get_users(UserListInput(filter="carol"))
        assert page.total_count == 0
