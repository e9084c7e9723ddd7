from .identity_service import IdentityService
from .contract_service import ContractListing, ContractService, ContractView

__all__ = [
    "IdentityService",
    "ContractService",
    "ContractView",
    "ContractListing",
]
