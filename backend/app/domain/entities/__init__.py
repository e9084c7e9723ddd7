from .user import User, UserRole
from .contract import Contract, DocumentStatus, REQUIRED_FIELDS

__all__ = [
    "User",
    "UserRole",
    "Contract",
    "DocumentStatus",
    "REQUIRED_FIELDS",
]
