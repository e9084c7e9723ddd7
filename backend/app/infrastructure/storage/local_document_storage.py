"""Local filesystem storage for rendered contract PDFs.

Storage layout:
    <storage_dir>/contracts/<contract_id>-<epoch_ms>-<hex>.pdf

The document reference is the path relative to ``storage_dir``. Read
access goes through signed links served by ``GET /files/{ref}``:

    <public_base_url>/files/<ref>?expires=<unix>&signature=<hmac>
"""

import logging
import secrets
import time
from pathlib import Path, PurePosixPath
from urllib.parse import quote, urlencode

from app.application.interfaces import DEFAULT_URL_TTL_SECONDS, DocumentStorage
from app.domain.exceptions import EntityNotFoundError, StorageError
from app.infrastructure.storage.url_signer import UrlSigner

logger = logging.getLogger(__name__)

_PREFIX = "contracts"


class LocalDocumentStorage(DocumentStorage):
    """Infrastructure adapter for document storage on the local disk."""

    def __init__(self, storage_dir: str, public_base_url: str, signer: UrlSigner):
        self._root = Path(storage_dir)
        self._root.mkdir(parents=True, exist_ok=True)
        self._base_url = public_base_url.rstrip("/")
        self._signer = signer

    # ── Upload ──────────────────────────────────────────────────────

    async def upload(self, content: bytes, contract_id: str) -> str:
        """Write ``content`` under a fresh key for ``contract_id``."""
        stamp = int(time.time() * 1000)
        document_ref = f"{_PREFIX}/{contract_id}-{stamp}-{secrets.token_hex(4)}.pdf"
        dest_path = self._resolve(document_ref)

        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            dest_path.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"could not store {document_ref}") from exc

        logger.info("Stored document: %s (%d bytes)", document_ref, len(content))
        return document_ref

    # ── Temporary URLs ──────────────────────────────────────────────

    async def get_temporary_url(
        self, document_ref: str, ttl_seconds: int = DEFAULT_URL_TTL_SECONDS
    ) -> str:
        if not document_ref:
            return ""
        expires = int(time.time()) + ttl_seconds
        query = urlencode({
            "expires": expires,
            "signature": self._signer.sign(document_ref, expires),
        })
        return f"{self._base_url}/files/{quote(document_ref)}?{query}"

    async def get_temporary_urls(
        self, document_refs: list[str], ttl_seconds: int = DEFAULT_URL_TTL_SECONDS
    ) -> dict[str, str]:
        return {
            ref: await self.get_temporary_url(ref, ttl_seconds)
            for ref in dict.fromkeys(document_refs)
            if ref
        }

    def open(self, document_ref: str, expires: int, signature: str) -> Path:
        """Return the file behind a signed link.

        Raises:
            StorageError: if the signature is wrong or the link expired.
            EntityNotFoundError: if the document no longer exists.
        """
        if not self._signer.verify(document_ref, expires, signature):
            raise StorageError("invalid or expired document link")
        path = self._resolve(document_ref)
        if not path.is_file():
            raise EntityNotFoundError("Document", document_ref)
        return path

    # ── Deletion ────────────────────────────────────────────────────

    async def delete(self, document_ref: str) -> bool:
        """Best-effort removal; failures are logged and reported as False."""
        try:
            path = self._resolve(document_ref)
            if not path.exists():
                logger.warning("Document already gone: %s", document_ref)
                return False
            path.unlink()
        except (OSError, StorageError) as exc:
            logger.warning("Failed to delete document %s: %s", document_ref, exc)
            return False

        logger.info("Deleted document: %s", document_ref)
        return True

    # ── Utilities ───────────────────────────────────────────────────

    def _resolve(self, document_ref: str) -> Path:
        """Map a reference to a path, refusing anything outside the root."""
        relative = PurePosixPath(document_ref)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise StorageError(f"invalid document reference: {document_ref!r}")
        return self._root.joinpath(*relative.parts)
