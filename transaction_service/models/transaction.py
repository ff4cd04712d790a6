from sqlalchemy import BigInteger, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

# Ids are unsigned but must fit in a signed 64-bit database integer
MAX_TRANSACTION_ID = 2**63 - 1


class Transaction(Base):
    """
    A monetary transaction, optionally linked to a parent transaction.

    Ids are supplied by the client. Records are append-only: once created a
    transaction is never updated or deleted, so parent links always point to
    rows that were inserted earlier.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    parent_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("transactions.id"), nullable=True, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, amount={self.amount}, "
            f"type='{self.type}', parent_id={self.parent_id})>"
        )
