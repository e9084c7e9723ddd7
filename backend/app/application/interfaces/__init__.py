from .user_repository import UserRepository
from .contract_repository import ContractRepository
from .document_renderer import ContractDocumentRenderer
from .document_storage import DocumentStorage, DEFAULT_URL_TTL_SECONDS

__all__ = [
    "UserRepository",
    "ContractRepository",
    "ContractDocumentRenderer",
    "DocumentStorage",
    "DEFAULT_URL_TTL_SECONDS",
]
