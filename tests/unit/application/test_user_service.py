"""Tests for UserService."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from userhub.application.services import UserService
from userhub.domain.user import UserKey, UserRoleMembership

from tests.shared.fixtures.factories import TestUserFactory


def _make_service(user_repo=None, role_service=None) -> UserService:
    return UserService(
        user_repository=user_repo if user_repo is not None else AsyncMock(),
        user_role_service=role_service if role_service is not None else AsyncMock(),
    )


@pytest.fixture
def user_repo():
    return AsyncMock()


@pytest.fixture
def role_service():
    return AsyncMock()


class TestGetUsers:
    @pytest.mark.asyncio
    async def test_single_batched_role_lookup_for_all_users(
        self,
        user_repo,
        role_service,
    ):
        alice = TestUserFactory.alice()
        bob = TestUserFactory.bob()
        admin = TestUserFactory.admin()
        user_repo.list_all.return_value = [alice, bob, admin]
        role_service.get_roles.return_value = {
            alice.id: TestUserFactory.roles(alice, "editor"),
            admin.id: TestUserFactory.roles(admin, "admin", "editor"),
        }
        service = _make_service(user_repo, role_service)

        users = await service.get_users()

        role_service.get_roles.assert_awaited_once_with([alice, bob, admin])
        role_service.get_user_roles.assert_not_awaited()
        assert users == [alice, bob, admin]
        assert alice.role_names == ["editor"]
        assert admin.role_names == ["admin", "editor"]

    @pytest.mark.asyncio
    async def test_users_missing_from_batch_get_empty_roles(
        self,
        user_repo,
        role_service,
    ):
        bob = TestUserFactory.bob()
        bob.attach_roles(TestUserFactory.roles(bob, "stale"))
        user_repo.list_all.return_value = [bob]
        role_service.get_roles.return_value = {}
        service = _make_service(user_repo, role_service)

        users = await service.get_users()

        assert users[0].roles == []

    @pytest.mark.asyncio
    async def test_empty_store_still_performs_one_lookup(
        self,
        user_repo,
        role_service,
    ):
        user_repo.list_all.return_value = []
        role_service.get_roles.return_value = {}
        service = _make_service(user_repo, role_service)

        assert await service.get_users() == []
        role_service.get_roles.assert_awaited_once_with([])


class TestGetUser:
    @pytest.mark.asyncio
    async def test_returns_user_with_its_roles(self, user_repo, role_service):
        alice = TestUserFactory.alice()
        memberships = TestUserFactory.roles(alice, "admin")
        user_repo.find_by_id.return_value = alice
        role_service.get_user_roles.return_value = memberships
        service = _make_service(user_repo, role_service)
        key = UserKey(alice.id)

        user = await service.get_user(key)

        user_repo.find_by_id.assert_awaited_once_with(key)
        role_service.get_user_roles.assert_awaited_once_with(alice)
        assert user is alice
        assert user.roles == memberships

    @pytest.mark.asyncio
    async def test_absent_user_returns_none_without_role_lookup(
        self,
        user_repo,
        role_service,
    ):
        user_repo.find_by_id.return_value = None
        service = _make_service(user_repo, role_service)

        result = await service.get_user(UserKey(TestUserFactory.BOB_ID))

        assert result is None
        role_service.get_user_roles.assert_not_awaited()
        role_service.get_roles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_accepts_any_identity(self, user_repo, role_service):
        membership = UserRoleMembership(TestUserFactory.ALICE_ID, "admin")
        user_repo.find_by_id.return_value = None
        service = _make_service(user_repo, role_service)

        await service.get_user(membership)

        user_repo.find_by_id.assert_awaited_once_with(membership)


class TestGetUserByEmail:
    @pytest.mark.asyncio
    async def test_returns_user_with_its_roles(self, user_repo, role_service):
        alice = TestUserFactory.alice()
        user_repo.find_by_email.return_value = alice
        role_service.get_user_roles.return_value = TestUserFactory.roles(
            alice,
            "editor",
        )
        service = _make_service(user_repo, role_service)

        user = await service.get_user_by_email(alice.email)

        user_repo.find_by_email.assert_awaited_once_with(alice.email)
        assert user.role_names == ["editor"]

    @pytest.mark.asyncio
    async def test_absent_email_returns_none_without_role_lookup(
        self,
        user_repo,
        role_service,
    ):
        user_repo.find_by_email.return_value = None
        service = _make_service(user_repo, role_service)

        assert await service.get_user_by_email("nobody@example.com") is None
        role_service.get_user_roles.assert_not_awaited()


class TestCommands:
    @pytest.mark.asyncio
    async def test_add_user_delegates_without_role_handling(
        self,
        user_repo,
        role_service,
    ):
        alice = TestUserFactory.alice()
        service = _make_service(user_repo, role_service)

        await service.add_user(alice)

        user_repo.add.assert_awaited_once_with(alice)
        assert role_service.mock_calls == []

    @pytest.mark.asyncio
    async def test_update_user_delegates_unchanged(self, user_repo):
        alice = TestUserFactory.alice()
        service = _make_service(user_repo)

        await service.update_user(alice)

        user_repo.update.assert_awaited_once_with(alice)

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, user_repo):
        user_repo.add.side_effect = RuntimeError("store down")
        service = _make_service(user_repo)

        with pytest.raises(RuntimeError, match="store down"):
            await service.add_user(TestUserFactory.alice())


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_deletes_resolved_user_and_its_roles(
        self,
        user_repo,
        role_service,
    ):
        stored = TestUserFactory.alice()
        user_repo.find_by_id.return_value = stored
        service = _make_service(user_repo, role_service)
        key = UserKey(stored.id)

        await service.delete_user(key)

        user_repo.find_by_id.assert_awaited_once_with(key)
        user_repo.delete.assert_awaited_once_with(stored)
        role_service.delete_roles.assert_awaited_once_with(stored)
        # The resolved user is passed on, not the caller's identity
        assert user_repo.delete.await_args.args[0] is stored
        assert role_service.delete_roles.await_args.args[0] is stored

    @pytest.mark.asyncio
    async def test_absent_user_is_a_no_op(self, user_repo, role_service):
        user_repo.find_by_id.return_value = None
        service = _make_service(user_repo, role_service)

        await service.delete_user(UserKey(TestUserFactory.BOB_ID))

        user_repo.delete.assert_not_awaited()
        role_service.delete_roles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_role_deletion_failure_leaves_user_deleted(
        self,
        user_repo,
        role_service,
    ):
        stored = TestUserFactory.alice()
        user_repo.find_by_id.return_value = stored
        role_service.delete_roles.side_effect = RuntimeError("roles down")
        service = _make_service(user_repo, role_service)

        with pytest.raises(RuntimeError, match="roles down"):
            await service.delete_user(stored)

        user_repo.delete.assert_awaited_once_with(stored)

    @pytest.mark.asyncio
    async def test_user_deletion_failure_still_removes_roles(
        self,
        user_repo,
        role_service,
    ):
        stored = TestUserFactory.alice()
        user_repo.find_by_id.return_value = stored
        user_repo.delete.side_effect = RuntimeError("users down")
        service = _make_service(user_repo, role_service)

        with pytest.raises(RuntimeError, match="users down"):
            await service.delete_user(UserKey(stored.id))

        role_service.delete_roles.assert_awaited_once_with(stored)


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancellation_during_store_call_propagates(self, role_service):
        started = asyncio.Event()

        async def _slow_list_all():
            started.set()
            await asyncio.sleep(3600)

        user_repo = AsyncMock()
        user_repo.list_all.side_effect = _slow_list_all
        service = _make_service(user_repo, role_service)

        task = asyncio.create_task(service.get_users())
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        role_service.get_roles.assert_not_awaited()
