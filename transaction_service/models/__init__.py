from .base import Base
from .transaction import Transaction, MAX_TRANSACTION_ID

__all__ = [
    "Base",
    "Transaction",
    "MAX_TRANSACTION_ID",
]
