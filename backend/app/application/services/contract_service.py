"""Contract service — orchestrates contract CRUD and the PDF pipeline.

Create and update run a two-phase sequence inside the request:

    write record (status=pending) → render PDF → upload → patch record
    with the new reference (status=ready) → issue a temporary URL

The sequence is not atomic. When rendering or uploading fails the record
keeps its previous reference and is marked ``failed``; the write that
preceded it is not rolled back.
"""

import logging
from dataclasses import dataclass, field

from app.application.interfaces import (
    DEFAULT_URL_TTL_SECONDS,
    ContractDocumentRenderer,
    ContractRepository,
    DocumentStorage,
)
from app.application.schemas.contract import ContractCreate, ContractUpdate
from app.domain.access_policy import (
    ContractOperation,
    authorize,
    authorize_role,
    list_scope,
)
from app.domain.entities import Contract, DocumentStatus, User, UserRole
from app.domain.exceptions import EntityNotFoundError, RenderError, StorageError
from app.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("ContractDocumentPipeline")


@dataclass
class ContractView:
    """A contract together with its freshly issued temporary URL."""

    contract: Contract
    pdf_url: str = ""


@dataclass
class ContractListing:
    contracts: list[ContractView] = field(default_factory=list)
    role: UserRole = UserRole.USER


class ContractService:
    """Application service for the contract lifecycle. Depends on ports only (DI)."""

    def __init__(
        self,
        repository: ContractRepository,
        renderer: ContractDocumentRenderer,
        storage: DocumentStorage,
        *,
        url_ttl_seconds: int = DEFAULT_URL_TTL_SECONDS,
        fail_on_document_error: bool = True,
    ):
        self._repository = repository
        self._renderer = renderer
        self._storage = storage
        self._url_ttl = url_ttl_seconds
        self._fail_on_document_error = fail_on_document_error

    # ── Queries ──────────────────────────────────────────────────────

    async def list_contracts(self, actor: User) -> ContractListing:
        """List the contracts visible to ``actor`` with their temporary URLs."""
        authorize_role(ContractOperation.LIST, actor)
        contracts = await self._repository.get_all(created_by=list_scope(actor))

        refs = [c.document_ref for c in contracts if c.document_ref]
        urls = await self._storage.get_temporary_urls(refs, self._url_ttl) if refs else {}

        return ContractListing(
            contracts=[
                ContractView(c, urls.get(c.document_ref, "") if c.document_ref else "")
                for c in contracts
            ],
            role=actor.role,
        )

    async def get_contract(self, actor: User, contract_id: str) -> ContractView:
        contract = await self._require(contract_id)
        authorize(ContractOperation.GET, actor, contract.created_by)
        url = await self._storage.get_temporary_url(contract.document_ref, self._url_ttl)
        return ContractView(contract, url)

    # ── Commands ─────────────────────────────────────────────────────

    async def create_contract(self, actor: User, data: ContractCreate) -> ContractView:
        authorize(ContractOperation.CREATE, actor)

        contract = Contract(
            city=data.city or "",
            address=data.address or "",
            driver_name=data.driver_name or "",
            id_number=data.id_number or "",
            birthday=data.birthday or "",
            extra_notes=data.extra_notes or "",
            created_by=actor.external_identity,
            document_status=DocumentStatus.PENDING,
        )
        contract = await self._repository.create(contract)
        logger.info("Contract %s created by %s", contract.id, actor.external_identity)

        return await self._publish_document(contract)

    async def update_contract(
        self, actor: User, contract_id: str, changes: ContractUpdate
    ) -> ContractView:
        authorize_role(ContractOperation.UPDATE, actor)
        contract = await self._require(contract_id)
        authorize(ContractOperation.UPDATE, actor, contract.created_by)

        contract.apply_changes(changes.model_dump(exclude_unset=True))
        contract.mark_document_pending()
        contract = await self._repository.update(contract)
        logger.info("Contract %s updated by %s", contract.id, actor.external_identity)

        return await self._publish_document(contract)

    async def delete_contract(self, actor: User, contract_id: str) -> None:
        """Delete the record first, then make one attempt to delete its document."""
        contract = await self._require(contract_id)
        authorize(ContractOperation.DELETE, actor, contract.created_by)

        await self._repository.delete(contract.id)
        logger.info("Contract %s deleted by %s", contract.id, actor.external_identity)

        if contract.document_ref:
            deleted = await self._storage.delete(contract.document_ref)
            if deleted:
                plog.step_complete(
                    PipelineStage.CLEANUP, "Removed contract document",
                    ref=contract.document_ref,
                )
            else:
                logger.warning(
                    "Document %s of deleted contract %s was not removed",
                    contract.document_ref,
                    contract.id,
                )

    # ── Internals ────────────────────────────────────────────────────

    async def _require(self, contract_id: str) -> Contract:
        contract = await self._repository.get_by_id(contract_id)
        if contract is None:
            raise EntityNotFoundError("Contract", contract_id)
        return contract

    async def _publish_document(self, contract: Contract) -> ContractView:
        """Render, upload and attach the PDF for ``contract``."""
        plog.separator(f"Contract {contract.id}")
        try:
            with plog.timed_step(PipelineStage.RENDER, "Rendering contract PDF"):
                content = await self._renderer.render(contract)
            with plog.timed_step(PipelineStage.UPLOAD, "Uploading contract PDF", size_bytes=len(content)):
                document_ref = await self._storage.upload(content, contract.id)
        except (RenderError, StorageError):
            failed = await self._repository.patch_document(
                contract.id, status=DocumentStatus.FAILED
            )
            if self._fail_on_document_error:
                raise
            previous_url = await self._storage.get_temporary_url(
                failed.document_ref, self._url_ttl
            )
            return ContractView(failed, previous_url)
        except Exception:
            # never leave the record looking like a render in progress
            await self._repository.patch_document(contract.id, status=DocumentStatus.FAILED)
            raise

        patched = await self._repository.patch_document(
            contract.id, status=DocumentStatus.READY, document_ref=document_ref
        )
        plog.step_complete(PipelineStage.PATCH, "Attached document", ref=document_ref)

        url = await self._storage.get_temporary_url(document_ref, self._url_ttl)
        plog.detail("Temporary URL issued", ttl_seconds=self._url_ttl)
        return ContractView(patched, url)
