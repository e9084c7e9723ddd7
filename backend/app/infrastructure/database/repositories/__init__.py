from .user_repository import SQLAlchemyUserRepository
from .contract_repository import SQLAlchemyContractRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyContractRepository",
]
