from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.common.exceptions import NotFoundError, TransactionFailure, ValidationError
from app.core.dependencies import get_db
from app.schemas.balance_sheet import (
    BalanceSheetSubmit,
    BalanceSheetResponse,
    BalanceSheetDetailResponse,
    BalanceSheetListResponse,
    BalanceSheetDeleteResponse,
    ExpenseLineResponse,
    PurchaseLineResponse,
)
from app.services.balance_sheet_service import (
    submit_day,
    get_day,
    list_days,
    delete_day,
)
from app.logger_config import logger

router = APIRouter()


def _detail_response(sheet, expenses, purchases) -> BalanceSheetDetailResponse:
    return BalanceSheetDetailResponse(
        **BalanceSheetResponse.model_validate(sheet).model_dump(),
        expenses=[ExpenseLineResponse.model_validate(e) for e in expenses],
        shop_purchases=[PurchaseLineResponse.model_validate(p) for p in purchases],
    )


@router.get("", response_model=BalanceSheetListResponse)
def list_balance_sheets(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: int = Query(30, ge=1, le=366),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """List balance sheets, newest first, optionally within a date range."""
    try:
        rows, total = list_days(db, start_date=start_date, end_date=end_date, skip=offset, limit=limit)
        return BalanceSheetListResponse(
            total=total,
            balance_sheets=[BalanceSheetResponse.model_validate(r) for r in rows],
        )
    except Exception as e:
        logger.exception("Error fetching balance sheets")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch balance sheets"
        )


@router.get("/{sheet_date}", response_model=BalanceSheetDetailResponse)
def get_balance_sheet(sheet_date: date, db: Session = Depends(get_db)):
    """Balance sheet for one day with its expense lines and shop purchases."""
    try:
        sheet, expenses, purchases = get_day(db, sheet_date)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return _detail_response(sheet, expenses, purchases)


@router.post("", response_model=BalanceSheetDetailResponse, status_code=status.HTTP_201_CREATED)
def submit_balance_sheet(data: BalanceSheetSubmit, db: Session = Depends(get_db)):
    """
    Create or replace the balance sheet for ``sheet_date``.
    kasa_sistem, toplam, fark and devir_toplam are computed here; client values are ignored.
    """
    try:
        sheet = submit_day(db, data)
        sheet, expenses, purchases = get_day(db, sheet.sheet_date)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return _detail_response(sheet, expenses, purchases)


@router.delete("/{sheet_date}", response_model=BalanceSheetDeleteResponse)
def delete_balance_sheet(sheet_date: date, db: Session = Depends(get_db)):
    """Delete a day's sheet and its lines. The next day's devir_toplam is not recomputed."""
    try:
        delete_day(db, sheet_date)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return BalanceSheetDeleteResponse(message="Balance sheet deleted successfully")
