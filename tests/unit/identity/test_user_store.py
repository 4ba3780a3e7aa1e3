"""Tests for the UserStore identity adapter."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from userhub.domain.user import UserKey
from userhub.exceptions import UnsupportedOperationError
from userhub.identity import (
    IdentityResult,
    UserPasswordStoreContract,
    UserRoleStoreContract,
    UserStore,
    UserStoreContract,
)

from tests.shared.fixtures.factories import TestUserFactory


@pytest.fixture
def user_service():
    return AsyncMock()


@pytest.fixture
def role_service():
    return AsyncMock()


@pytest.fixture
def store(user_service, role_service) -> UserStore:
    return UserStore(user_service=user_service, user_role_service=role_service)


class TestContracts:
    def test_implements_all_three_capabilities(self, store):
        assert isinstance(store, UserStoreContract)
        assert isinstance(store, UserPasswordStoreContract)
        assert isinstance(store, UserRoleStoreContract)


class TestNames:
    @pytest.mark.asyncio
    async def test_user_id_is_string_form_of_uuid(self, store):
        alice = TestUserFactory.alice()
        assert await store.get_user_id(alice) == str(TestUserFactory.ALICE_ID)

    @pytest.mark.asyncio
    async def test_user_name_and_normalized_name_are_the_email(self, store):
        alice = TestUserFactory.alice()

        assert await store.get_user_name(alice) == alice.email
        assert await store.get_normalized_user_name(alice) == alice.email

    @pytest.mark.asyncio
    async def test_set_user_name_overwrites_email(self, store):
        alice = TestUserFactory.alice()

        await store.set_user_name(alice, "renamed@example.com")

        assert alice.email == "renamed@example.com"

    @pytest.mark.asyncio
    async def test_set_normalized_user_name_stores_exact_value(self, store):
        alice = TestUserFactory.alice()

        await store.set_normalized_user_name(alice, "ALICE@EXAMPLE.COM")

        assert alice.email == "ALICE@EXAMPLE.COM"


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_create_delegates_and_succeeds(self, store, user_service):
        alice = TestUserFactory.alice()

        result = await store.create(alice)

        user_service.add_user.assert_awaited_once_with(alice)
        assert result == IdentityResult.success()
        assert result.succeeded

    @pytest.mark.asyncio
    async def test_update_delegates_and_succeeds(self, store, user_service):
        alice = TestUserFactory.alice()

        result = await store.update(alice)

        user_service.update_user.assert_awaited_once_with(alice)
        assert result.succeeded

    @pytest.mark.asyncio
    async def test_delete_delegates_and_succeeds(self, store, user_service):
        alice = TestUserFactory.alice()

        result = await store.delete(alice)

        user_service.delete_user.assert_awaited_once_with(alice)
        assert result.succeeded

    @pytest.mark.asyncio
    async def test_service_failure_propagates(self, store, user_service):
        user_service.add_user.side_effect = RuntimeError("store down")

        with pytest.raises(RuntimeError):
            await store.create(TestUserFactory.alice())


class TestLookups:
    @pytest.mark.asyncio
    async def test_find_by_id_parses_uuid(self, store, user_service):
        alice = TestUserFactory.alice()
        user_service.get_user.return_value = alice

        found = await store.find_by_id(str(alice.id))

        user_service.get_user.assert_awaited_once_with(UserKey(alice.id))
        assert found is alice

    @pytest.mark.asyncio
    async def test_find_by_id_accepts_uppercase_uuid(self, store, user_service):
        user_id = uuid4()
        user_service.get_user.return_value = None

        assert await store.find_by_id(str(user_id).upper()) is None
        user_service.get_user.assert_awaited_once_with(UserKey(user_id))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["not-a-guid", "", "1234", None])
    async def test_find_by_id_malformed_returns_none(
        self,
        store,
        user_service,
        raw_id,
    ):
        assert await store.find_by_id(raw_id) is None
        user_service.get_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_find_by_name_uses_email_lookup(self, store, user_service):
        user_service.get_user_by_email.return_value = None

        assert await store.find_by_name("bob@example.com") is None
        user_service.get_user_by_email.assert_awaited_once_with("bob@example.com")


class TestPasswords:
    @pytest.mark.asyncio
    async def test_set_and_get_password_hash(self, store):
        bob = TestUserFactory.bob()

        await store.set_password_hash(bob, "$2b$04$hash")

        assert await store.get_password_hash(bob) == "$2b$04$hash"

    @pytest.mark.asyncio
    async def test_has_password_is_unsupported(self, store):
        with pytest.raises(UnsupportedOperationError):
            await store.has_password(TestUserFactory.alice())


class TestRoles:
    @pytest.mark.asyncio
    async def test_get_roles_returns_role_names(self, store, role_service):
        alice = TestUserFactory.alice()
        role_service.get_role_names.return_value = ["admin"]

        assert await store.get_roles(alice) == ["admin"]
        role_service.get_role_names.assert_awaited_once_with(alice)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("operation", "args"),
        [
            ("add_to_role", (TestUserFactory.alice(), "admin")),
            ("remove_from_role", (TestUserFactory.alice(), "admin")),
            ("is_in_role", (TestUserFactory.alice(), "admin")),
            ("get_users_in_role", ("admin",)),
        ],
    )
    async def test_unsupported_members_raise(
        self,
        store,
        role_service,
        operation,
        args,
    ):
        with pytest.raises(UnsupportedOperationError) as exc_info:
            await getattr(store, operation)(*args)

        assert exc_info.value.operation == operation
        assert isinstance(exc_info.value, NotImplementedError)
        assert role_service.mock_calls == []
