from .transaction_store import TransactionStore, is_unique_violation
from .transaction_service import TransactionService

__all__ = [
    "TransactionStore",
    "is_unique_violation",
    "TransactionService",
]
