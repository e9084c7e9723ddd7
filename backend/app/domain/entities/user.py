"""Domain entity for platform users, keyed by their external identity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class UserRole(str, Enum):
    """Closed set of actor roles."""

    USER = "user"
    ADMIN = "admin"


@dataclass
class User:
    """A caller known to the service.

    Users are provisioned lazily the first time an unseen external identity
    makes a request and always start with the ``user`` role. Nothing in the
    HTTP surface changes a role afterwards.
    """

    external_identity: str
    role: UserRole = UserRole.USER
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
