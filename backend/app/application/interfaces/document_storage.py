"""Abstract interface (port) for the blob store holding rendered contracts."""

from abc import ABC, abstractmethod

DEFAULT_URL_TTL_SECONDS = 7200


class DocumentStorage(ABC):
    """Port for document storage with temporary read URLs."""

    @abstractmethod
    async def upload(self, content: bytes, contract_id: str) -> str:
        """Store a rendered document and return its reference.

        Each call yields a new reference, even for the same contract.

        Raises:
            StorageError: if the document could not be stored.
        """
        ...

    @abstractmethod
    async def get_temporary_url(
        self, document_ref: str, ttl_seconds: int = DEFAULT_URL_TTL_SECONDS
    ) -> str:
        """Return a time-limited read URL, or "" for an empty reference."""
        ...

    @abstractmethod
    async def get_temporary_urls(
        self, document_refs: list[str], ttl_seconds: int = DEFAULT_URL_TTL_SECONDS
    ) -> dict[str, str]:
        """Batch variant of get_temporary_url keyed by reference."""
        ...

    @abstractmethod
    async def delete(self, document_ref: str) -> bool:
        """Best-effort delete. Never raises; returns False on failure."""
        ...
