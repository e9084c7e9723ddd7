"""Abstract repository interface (port) for User persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import User, UserRole


class UserRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_external_identity(self, external_identity: str) -> User | None:
        """Retrieve the user bound to an external identity, if any."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user.

        Raises:
            DuplicateEntityError: if a user with the same external identity
                already exists.
        """
        ...

    @abstractmethod
    async def update_role(self, user_id: str, role: UserRole) -> User:
        """Change a user's role. Only used by start-up admin seeding."""
        ...
