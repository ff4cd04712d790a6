from typing import Annotated
from pydantic import BaseModel, Field, field_validator

from ..models.transaction import MAX_TRANSACTION_ID

TransactionId = Annotated[int, Field(strict=True, ge=0, le=MAX_TRANSACTION_ID)]


class TransactionCreate(BaseModel):
    """Request body for creating a transaction. The id comes from the URL."""
    amount: Annotated[float, Field(strict=True, allow_inf_nan=False)]
    type: Annotated[str, Field(strict=True, max_length=50)]
    parent_id: TransactionId | None = None

    @field_validator("type")
    @classmethod
    def type_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("type must not be blank")
        return value


class TransactionStatusResponse(BaseModel):
    """Result of a create."""
    status: str


class TransactionIdsResponse(BaseModel):
    """Ids of transactions matching a type."""
    transaction_ids: list[int]


class TransitiveSumResponse(BaseModel):
    """Sum of all descendants of a transaction."""
    sum: float


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""
    success: str = "false"
    error: str
    status: int
