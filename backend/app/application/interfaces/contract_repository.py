"""Abstract repository interface (port) for Contract persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import Contract, DocumentStatus


class ContractRepository(ABC):
    """Port for contract persistence — implemented in the infrastructure layer.

    Every write is durable on its own; there are no cross-record
    transactions.
    """

    @abstractmethod
    async def get_by_id(self, contract_id: str) -> Contract | None:
        """Retrieve a single contract by its UUID."""
        ...

    @abstractmethod
    async def get_all(self, *, created_by: str | None = None) -> list[Contract]:
        """List contracts, newest first. ``created_by=None`` lists all."""
        ...

    @abstractmethod
    async def create(self, contract: Contract) -> Contract:
        """Validate required fields and persist a new contract."""
        ...

    @abstractmethod
    async def update(self, contract: Contract) -> Contract:
        """Persist merged fields of an existing contract."""
        ...

    @abstractmethod
    async def patch_document(
        self,
        contract_id: str,
        *,
        status: DocumentStatus,
        document_ref: str = "",
    ) -> Contract:
        """Set the document status and, when non-empty, the document reference."""
        ...

    @abstractmethod
    async def delete(self, contract_id: str) -> bool:
        """Delete a contract. Returns True if deleted, False if not found."""
        ...
