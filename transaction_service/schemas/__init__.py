from .transaction import (
    TransactionCreate,
    TransactionStatusResponse,
    TransactionIdsResponse,
    TransitiveSumResponse,
    ErrorResponse,
)

__all__ = [
    "TransactionCreate",
    "TransactionStatusResponse",
    "TransactionIdsResponse",
    "TransitiveSumResponse",
    "ErrorResponse",
]
