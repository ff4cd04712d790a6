import logging

from ..config import SumStrategy
from ..errors import GraphIntegrityError, ParentNotFoundError, TransactionNotFoundError
from ..models import Transaction
from .transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class TransactionService:
    """Creation and aggregation rules on top of a TransactionStore."""

    def __init__(self, store: TransactionStore, sum_strategy: SumStrategy = SumStrategy.QUERY):
        self.store = store
        self.sum_strategy = sum_strategy

    def create_transaction(self, transaction: Transaction) -> bool:
        """
        Persist a new transaction.

        A named parent must already exist. Duplicate ids are left to the
        store's unique constraint, which raises DuplicateTransactionError.
        """
        if transaction.parent_id is not None:
            parent = self.store.get_by_id(transaction.parent_id)
            if parent is None:
                raise ParentNotFoundError(transaction.parent_id)

        created = self.store.insert_if_absent(transaction)
        logger.info(
            "Created transaction %s (type=%s, parent_id=%s)",
            transaction.id, transaction.type, transaction.parent_id,
        )
        return created

    def get_transaction_ids_by_type(self, transaction_type: str) -> list[int]:
        """Get ids of all transactions with the given type."""
        return self.store.get_by_type(transaction_type)

    def get_transitive_sum(self, transaction_id: int) -> float:
        """
        Sum the amounts of every descendant of a transaction, excluding the
        transaction itself.

        Raises TransactionNotFoundError if the root does not exist.
        """
        if self.store.get_by_id(transaction_id) is None:
            raise TransactionNotFoundError(transaction_id)

        if self.sum_strategy == SumStrategy.WALK:
            return self._walk_descendants(transaction_id)
        return self.store.sum_descendants(transaction_id)

    def _walk_descendants(self, root_id: int) -> float:
        """Breadth-first walk over child edges, one store query per level."""
        total = 0.0
        visited = {root_id}
        frontier = [root_id]

        while frontier:
            next_frontier = []
            for child_id, amount in self.store.get_children(frontier):
                if child_id in visited:
                    raise GraphIntegrityError(child_id, root_id)
                visited.add(child_id)
                total += amount
                next_frontier.append(child_id)
            frontier = next_frontier

        return total
