"""
Transaction store backed by SQLAlchemy.

All consistency guarantees come from the database: uniqueness of ids is the
primary key constraint and parent references are a foreign key. The store
never checks for an existing id before inserting.
"""

import logging
from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import DuplicateTransactionError, StoreUnavailableError
from ..models import Transaction

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation
UNIQUE_VIOLATION_CODE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """Check whether an IntegrityError came from a duplicate key."""
    orig = exc.orig
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        return code == UNIQUE_VIOLATION_CODE
    message = str(orig)
    return "UNIQUE constraint failed" in message or "PRIMARY KEY must be unique" in message


class TransactionStore:
    """Persistence operations on the transactions table."""

    def __init__(self, db: Session):
        self.db = db

    def insert_if_absent(self, transaction: Transaction) -> bool:
        """
        Insert a new transaction.

        Raises DuplicateTransactionError if the id is taken. On any failure
        the session is rolled back so nothing of the record remains.
        """
        statement = insert(Transaction).values(
            id=transaction.id,
            amount=transaction.amount,
            type=transaction.type,
            parent_id=transaction.parent_id,
        )
        try:
            self.db.execute(statement)
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise DuplicateTransactionError(transaction.id) from e
            raise StoreUnavailableError(
                f"could not insert transaction {transaction.id}", transaction.id
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailableError(
                f"could not insert transaction {transaction.id}", transaction.id
            ) from e
        logger.debug("Inserted transaction %s", transaction.id)
        return True

    def get_by_id(self, transaction_id: int) -> Transaction | None:
        """Get a transaction by id, or None if there is none."""
        try:
            return self.db.get(Transaction, transaction_id)
        except SQLAlchemyError as e:
            raise StoreUnavailableError(
                f"could not look up transaction {transaction_id}", transaction_id
            ) from e

    def get_by_type(self, transaction_type: str) -> list[int]:
        """Get ids of all transactions with the given type."""
        try:
            rows = self.db.execute(
                select(Transaction.id).where(Transaction.type == transaction_type)
            )
            return list(rows.scalars())
        except SQLAlchemyError as e:
            raise StoreUnavailableError(
                f"could not look up transactions of type '{transaction_type}'"
            ) from e

    def get_children(self, parent_ids: list[int]) -> list[tuple[int, float]]:
        """Get (id, amount) of every transaction whose parent is in parent_ids."""
        if not parent_ids:
            return []
        try:
            rows = self.db.execute(
                select(Transaction.id, Transaction.amount).where(
                    Transaction.parent_id.in_(parent_ids)
                )
            )
            return [(row.id, row.amount) for row in rows]
        except SQLAlchemyError as e:
            raise StoreUnavailableError("could not look up child transactions") from e

    def sum_descendants(self, root_id: int) -> float:
        """
        Sum the amounts of all transactions below root_id, excluding the root.

        Uses a recursive CTE. UNION rather than UNION ALL keeps the query
        finite even if the parent graph were ever corrupted into a cycle.
        """
        anchor = select(Transaction.id, Transaction.amount).where(
            Transaction.id == root_id
        )
        tree = anchor.cte("descendants", recursive=True)
        step = select(Transaction.id, Transaction.amount).join(
            tree, Transaction.parent_id == tree.c.id
        )
        tree = tree.union(step)

        query = select(func.coalesce(func.sum(tree.c.amount), 0.0)).where(
            tree.c.id != root_id
        )
        try:
            return float(self.db.execute(query).scalar_one())
        except SQLAlchemyError as e:
            raise StoreUnavailableError(
                f"could not sum descendants of transaction {root_id}", root_id
            ) from e
