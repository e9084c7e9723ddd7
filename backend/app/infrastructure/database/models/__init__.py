from .user import UserModel
from .contract import ContractModel

__all__ = [
    "UserModel",
    "ContractModel",
]
