"""Application service (use case) that maps external identities to users."""

import logging

from app.application.interfaces import UserRepository
from app.domain.entities import User, UserRole
from app.domain.exceptions import DuplicateEntityError, UnauthenticatedError

logger = logging.getLogger(__name__)


class IdentityService:
    """Resolves the caller on every request, provisioning unseen identities.

    Provisioning relies on the repository's uniqueness constraint on the
    external identity: when two first requests race, the loser's insert
    fails with DuplicateEntityError and it re-reads the winner's record.
    """

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def resolve(self, external_identity: str | None) -> User:
        if not external_identity:
            raise UnauthenticatedError()

        user = await self._repository.get_by_external_identity(external_identity)
        if user is not None:
            return user
        return await self._provision(User(external_identity=external_identity))

    async def ensure_admin(self, external_identity: str) -> User:
        """Make sure ``external_identity`` exists with the admin role."""
        user = await self._repository.get_by_external_identity(external_identity)
        if user is None:
            user = await self._provision(
                User(external_identity=external_identity, role=UserRole.ADMIN)
            )
        if user.role != UserRole.ADMIN:
            user = await self._repository.update_role(user.id, UserRole.ADMIN)
            logger.info("Promoted %s to admin", external_identity)
        return user

    async def _provision(self, user: User) -> User:
        try:
            created = await self._repository.create(user)
        except DuplicateEntityError:
            logger.debug(
                "User %s was provisioned concurrently; re-reading",
                user.external_identity,
            )
            existing = await self._repository.get_by_external_identity(
                user.external_identity
            )
            if existing is None:
                raise
            return existing
        logger.info(
            "Provisioned user %s with role %s",
            created.external_identity,
            created.role.value,
        )
        return created
