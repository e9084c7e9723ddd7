"""Abstract interface (port) for turning a contract into a PDF."""

from abc import ABC, abstractmethod
from datetime import date

from app.domain.entities import Contract


class ContractDocumentRenderer(ABC):
    """Port for document rendering — implemented in the infrastructure layer."""

    @abstractmethod
    async def render(self, contract: Contract, signed_on: date | None = None) -> bytes:
        """Render a fully populated contract snapshot.

        Args:
            contract: The contract with all fields resolved.
            signed_on: Signing date printed on the document; today if omitted.

        Returns:
            The complete PDF byte stream.

        Raises:
            RenderError: on any failure. No partial output is returned.
        """
        ...
