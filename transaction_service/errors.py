"""
Exceptions raised by the transaction store and service layer.

Routes translate these into HTTP errors; nothing below the API layer knows
about status codes.
"""


class TransactionServiceError(Exception):
    """Base class for all transaction service errors."""

    def __init__(self, message: str, transaction_id: int | None = None):
        self.transaction_id = transaction_id
        super().__init__(message)


class ParentNotFoundError(TransactionServiceError):
    """The parent named by a new transaction does not exist."""

    def __init__(self, parent_id: int):
        self.parent_id = parent_id
        super().__init__("parent transaction does not exist", parent_id)


class DuplicateTransactionError(TransactionServiceError):
    """A transaction with the same id already exists."""

    def __init__(self, transaction_id: int):
        super().__init__("transaction with the same ID already exists", transaction_id)


class TransactionNotFoundError(TransactionServiceError):
    """No transaction exists for the given id."""

    def __init__(self, transaction_id: int):
        super().__init__("transaction does not exist for given transaction ID", transaction_id)


class StoreUnavailableError(TransactionServiceError):
    """The underlying store failed to answer a query or accept a write."""


class GraphIntegrityError(TransactionServiceError):
    """
    The parent graph is not acyclic.

    Creation order makes cycles impossible, so this only fires on data that
    was modified outside the service.
    """

    def __init__(self, transaction_id: int, root_id: int):
        self.root_id = root_id
        super().__init__(
            f"transaction {transaction_id} reached twice while walking descendants of {root_id}",
            transaction_id,
        )
