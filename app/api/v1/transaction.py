from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.common.exceptions import NotFoundError, TransactionFailure, ValidationError
from app.core.dependencies import get_db
from app.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionListResponse,
    TransactionStatsResponse,
    TransactionDeleteResponse,
)
from app.services.transaction_service import (
    get_transaction_by_id,
    get_all_transactions,
    get_transaction_stats,
    create_transaction,
    void_transaction,
)
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=TransactionListResponse)
def get_transactions(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """Sales newest first, with their items."""
    try:
        transactions, total = get_all_transactions(db, skip=skip, limit=limit)
        return TransactionListResponse(
            total=total,
            transactions=[TransactionResponse.model_validate(t) for t in transactions],
        )
    except Exception as e:
        logger.error(f"Error fetching transactions: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch transactions"
        )


@router.get("/stats/summary", response_model=TransactionStatsResponse)
def get_stats(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    try:
        return TransactionStatsResponse(**get_transaction_stats(db, start_date=start_date, end_date=end_date))
    except Exception as e:
        logger.error(f"Error fetching transaction stats: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch stats"
        )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(transaction_id: int, db: Session = Depends(get_db)):
    transaction = get_transaction_by_id(db, transaction_id)
    if not transaction:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return TransactionResponse.model_validate(transaction)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def checkout(data: TransactionCreate, db: Session = Depends(get_db)):
    """
    Complete a sale.
    Stock is decremented for every item not sold by weight.
    """
    try:
        transaction = create_transaction(db, data)
        return TransactionResponse.model_validate(transaction)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{transaction_id}", response_model=TransactionDeleteResponse)
def void_transaction_route(transaction_id: int, db: Session = Depends(get_db)):
    """Void a sale and put its stock back."""
    try:
        void_transaction(db, transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return TransactionDeleteResponse(message="Transaction deleted successfully")
