"""Unit tests for the IdentityService — lazy provisioning and races."""

import pytest

from app.application.interfaces import UserRepository
from app.application.services import IdentityService
from app.domain.entities import User, UserRole
from app.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    UnauthenticatedError,
)


class FakeUserRepository(UserRepository):
    """In-memory fake repository enforcing unique external identities."""

    def __init__(self):
        self._users: dict[str, User] = {}
        self.create_calls = 0

    async def get_by_external_identity(self, external_identity: str) -> User | None:
        return self._users.get(external_identity)

    async def create(self, user: User) -> User:
        self.create_calls += 1
        if user.external_identity in self._users:
            raise DuplicateEntityError("User", "external_identity", user.external_identity)
        self._users[user.external_identity] = user
        return user

    async def update_role(self, user_id: str, role: UserRole) -> User:
        for user in self._users.values():
            if user.id == user_id:
                user.role = role
                return user
        raise EntityNotFoundError("User", user_id)


class RacingUserRepository(FakeUserRepository):
    """Simulates another request provisioning the same identity first."""

    async def get_by_external_identity(self, external_identity: str) -> User | None:
        if self.create_calls == 0:
            return None
        return await super().get_by_external_identity(external_identity)

    async def create(self, user: User) -> User:
        if self.create_calls == 0:
            self._users[user.external_identity] = User(external_identity=user.external_identity)
        return await super().create(user)


@pytest.fixture
def repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.mark.asyncio
async def test_resolve_provisions_unseen_identity_as_user(repo):
    user = await IdentityService(repo).resolve("u1")
    assert user.external_identity == "u1"
    assert user.role == UserRole.USER


@pytest.mark.asyncio
async def test_resolve_is_idempotent(repo):
    service = IdentityService(repo)
    first = await service.resolve("u1")
    second = await service.resolve("u1")
    assert second.id == first.id
    assert second.role == first.role
    assert repo.create_calls == 1


@pytest.mark.asyncio
async def test_resolve_keeps_existing_admin_role(repo):
    service = IdentityService(repo)
    await service.ensure_admin("boss")
    user = await service.resolve("boss")
    assert user.role == UserRole.ADMIN


@pytest.mark.asyncio
@pytest.mark.parametrize("identity", [None, ""])
async def test_resolve_without_identity_is_unauthenticated(repo, identity):
    with pytest.raises(UnauthenticatedError):
        await IdentityService(repo).resolve(identity)
    assert repo.create_calls == 0


@pytest.mark.asyncio
async def test_duplicate_insert_rereads_concurrent_record():
    repo = RacingUserRepository()
    user = await IdentityService(repo).resolve("u1")
    assert user.external_identity == "u1"
    assert user.role == UserRole.USER
    assert len(repo._users) == 1


@pytest.mark.asyncio
async def test_ensure_admin_promotes_existing_user(repo):
    service = IdentityService(repo)
    await service.resolve("u9")
    admin = await service.ensure_admin("u9")
    assert admin.role == UserRole.ADMIN
    assert repo.create_calls == 1
