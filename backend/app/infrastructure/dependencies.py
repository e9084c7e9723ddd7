"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ContractDocumentRenderer, DocumentStorage
from app.application.services import ContractService, IdentityService
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database.repositories import (
    SQLAlchemyContractRepository,
    SQLAlchemyUserRepository,
)
from app.infrastructure.database.session import get_db_session
from app.infrastructure.rendering import ReportLabContractRenderer
from app.infrastructure.storage.local_document_storage import LocalDocumentStorage
from app.infrastructure.storage.url_signer import UrlSigner

# Checked in order; the first non-empty value wins
IDENTITY_HEADERS: tuple[str, ...] = (
    "x-wx-openid",
    "x-tcb-openid",
    "x-openid",
    "x-dev-openid",
)
IDENTITY_QUERY_PARAM = "openId"


def extract_external_identity(request: Request) -> str:
    """Pull the caller's external identity from headers, query or settings."""
    for header in IDENTITY_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    value = request.query_params.get(IDENTITY_QUERY_PARAM)
    if value:
        return value
    return get_settings().mock_open_id


@lru_cache
def get_document_storage() -> DocumentStorage:
    """Process-wide local document store, built once from settings."""
    settings = get_settings()
    return LocalDocumentStorage(
        storage_dir=settings.storage_dir,
        public_base_url=settings.public_base_url,
        signer=UrlSigner(settings.url_signing_secret),
    )


def get_contract_renderer() -> ContractDocumentRenderer:
    return ReportLabContractRenderer(font_name=get_settings().pdf_font_name)


async def get_identity_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[IdentityService, None]:
    """Provides an IdentityService with its repository wired up."""
    yield IdentityService(SQLAlchemyUserRepository(session))


async def get_current_user(
    request: Request,
    identity_service: IdentityService = Depends(get_identity_service),
) -> User:
    """Resolves (and on first contact provisions) the calling user."""
    return await identity_service.resolve(extract_external_identity(request))


async def get_contract_service(
    session: AsyncSession = Depends(get_db_session),
    renderer: ContractDocumentRenderer = Depends(get_contract_renderer),
    storage: DocumentStorage = Depends(get_document_storage),
) -> AsyncGenerator[ContractService, None]:
    """Provides a ContractService with repository, renderer and storage."""
    settings = get_settings()
    yield ContractService(
        repository=SQLAlchemyContractRepository(session),
        renderer=renderer,
        storage=storage,
        url_ttl_seconds=settings.temporary_url_ttl_seconds,
        fail_on_document_error=settings.fail_on_document_error,
    )
