import logging
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..errors import (
    DuplicateTransactionError,
    GraphIntegrityError,
    ParentNotFoundError,
    StoreUnavailableError,
    TransactionNotFoundError,
)
from ..models import Transaction, MAX_TRANSACTION_ID
from ..schemas import (
    TransactionCreate,
    TransactionStatusResponse,
    TransactionIdsResponse,
    TransitiveSumResponse,
)
from ..services import TransactionService, TransactionStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_transaction_service(db: Session = Depends(get_db)) -> TransactionService:
    """FastAPI dependency building a service bound to the request's session."""
    return TransactionService(TransactionStore(db), settings.transitive_sum_strategy)


@router.put(
    "/transaction/{transaction_id}",
    response_model=TransactionStatusResponse,
    status_code=201,
)
def create_transaction(
    transaction: TransactionCreate,
    transaction_id: int = Path(..., ge=0, le=MAX_TRANSACTION_ID),
    service: TransactionService = Depends(get_transaction_service),
):
    """Create a transaction with a client-supplied id."""
    new_transaction = Transaction(
        id=transaction_id,
        amount=transaction.amount,
        type=transaction.type,
        parent_id=transaction.parent_id,
    )

    try:
        created = service.create_transaction(new_transaction)
    except ParentNotFoundError:
        logger.warning(
            "Rejected transaction %s: parent %s does not exist",
            transaction_id, transaction.parent_id,
        )
        raise HTTPException(status_code=400, detail="Parent transaction does not exist")
    except DuplicateTransactionError:
        logger.warning("Rejected transaction %s: id already exists", transaction_id)
        raise HTTPException(
            status_code=400, detail="transaction with the same ID already exists"
        )
    except StoreUnavailableError:
        logger.exception("Error creating transaction %s", transaction_id)
        raise HTTPException(status_code=500, detail="Error creating transaction")

    return TransactionStatusResponse(status="ok" if created else "unable to create transaction")


@router.get("/types/{transaction_type}", response_model=TransactionIdsResponse)
def get_transactions_by_type(
    transaction_type: str,
    service: TransactionService = Depends(get_transaction_service),
):
    """Get ids of all transactions with the given type."""
    try:
        transaction_ids = service.get_transaction_ids_by_type(transaction_type)
    except StoreUnavailableError:
        logger.exception("Error retrieving transactions of type '%s'", transaction_type)
        raise HTTPException(status_code=500, detail="Error retrieving transaction IDs")

    return TransactionIdsResponse(transaction_ids=transaction_ids)


@router.get("/sum/{transaction_id}", response_model=TransitiveSumResponse)
def get_transitive_sum(
    transaction_id: int = Path(..., ge=0, le=MAX_TRANSACTION_ID),
    service: TransactionService = Depends(get_transaction_service),
):
    """Sum of amounts of all transactions transitively linked below this one."""
    try:
        total = service.get_transitive_sum(transaction_id)
    except TransactionNotFoundError:
        raise HTTPException(
            status_code=400,
            detail="Transaction does not exist for given transaction ID",
        )
    except GraphIntegrityError:
        logger.exception("Parent graph is corrupted below transaction %s", transaction_id)
        raise HTTPException(status_code=500, detail="Transaction graph integrity violation")
    except StoreUnavailableError:
        logger.exception("Error retrieving transitive sum for %s", transaction_id)
        raise HTTPException(status_code=500, detail="Error retrieving transitive sum")

    return TransitiveSumResponse(sum=total)
