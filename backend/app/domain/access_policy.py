"""Access policy for contract operations — pure functions, no framework imports.

The decision depends only on the operation, the actor's role and identity,
and the ``created_by`` of the record being acted on:

    operation | owner | non-owner user | admin
    ----------+-------+----------------+------
    list      | own   | own            | all
    get       | yes   | no             | yes
    create    | yes   | yes            | no
    update    | yes   | no             | no
    delete    | yes   | no             | yes
"""

from enum import Enum

from app.domain.entities.user import User, UserRole
from app.domain.exceptions import ForbiddenError


class ContractOperation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# (operation, role) → whether ownership is required; absent pairs are denied
_RULES: dict[tuple[ContractOperation, UserRole], bool] = {
    (ContractOperation.LIST, UserRole.USER): False,
    (ContractOperation.LIST, UserRole.ADMIN): False,
    (ContractOperation.GET, UserRole.USER): True,
    (ContractOperation.GET, UserRole.ADMIN): False,
    (ContractOperation.CREATE, UserRole.USER): False,
    (ContractOperation.UPDATE, UserRole.USER): True,
    (ContractOperation.DELETE, UserRole.USER): True,
    (ContractOperation.DELETE, UserRole.ADMIN): False,
}


def is_allowed(
    operation: ContractOperation,
    role: UserRole,
    actor_identity: str,
    owner_identity: str | None = None,
) -> bool:
    """Return True if ``role``/``actor_identity`` may perform ``operation``."""
    requires_ownership = _RULES.get((operation, role))
    if requires_ownership is None:
        return False
    if not requires_ownership:
        return True
    return owner_identity is not None and owner_identity == actor_identity


def authorize_role(operation: ContractOperation, actor: User) -> None:
    """Reject roles that may never perform ``operation``, before any lookup."""
    if (operation, actor.role) not in _RULES:
        raise ForbiddenError(operation.value, actor.role.value)


def authorize(
    operation: ContractOperation,
    actor: User,
    owner_identity: str | None = None,
) -> None:
    """Raise ForbiddenError unless ``actor`` may perform ``operation``."""
    if not is_allowed(operation, actor.role, actor.external_identity, owner_identity):
        raise ForbiddenError(operation.value, actor.role.value)


def list_scope(actor: User) -> str | None:
    """Return the ``created_by`` filter for listing, or None for all records."""
    if actor.is_admin:
        return None
    return actor.external_identity
