from .contract import (
    ContractCreate,
    ContractUpdate,
    ContractOut,
    ContractEnvelope,
    ContractListResponse,
    MessageResponse,
    iso_timestamp,
)

__all__ = [
    "ContractCreate",
    "ContractUpdate",
    "ContractOut",
    "ContractEnvelope",
    "ContractListResponse",
    "MessageResponse",
    "iso_timestamp",
]
