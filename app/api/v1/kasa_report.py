from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.core.dependencies import get_db
from app.schemas.balance_sheet import BalanceSheetResponse
from app.schemas.report import KasaSummaryResponse, DailyProfitResponse
from app.services.report_service import get_kasa_summary, get_daily_profit
from app.logger_config import logger

router = APIRouter()


@router.get("/summary", response_model=KasaSummaryResponse)
def kasa_summary(
    target_date: Optional[date] = Query(None, alias="date", description="Defaults to today (shop time)"),
    db: Session = Depends(get_db)
):
    """Balance sheet, expense totals by type and shop purchase total for a day."""
    try:
        summary = get_kasa_summary(db, target_date)
    except Exception as e:
        logger.exception("Error fetching kasa summary")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch summary"
        )

    sheet = summary["balance_sheet"]
    summary["balance_sheet"] = BalanceSheetResponse.model_validate(sheet) if sheet else None
    return KasaSummaryResponse(**summary)


@router.get("/daily-profit", response_model=DailyProfitResponse)
def daily_profit(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    """Profit per day and product; today when no range is given."""
    try:
        start, end, rows = get_daily_profit(db, start_date=start_date, end_date=end_date)
        return DailyProfitResponse(start_date=start, end_date=end, rows=rows)
    except Exception as e:
        logger.exception("Error fetching daily profit report")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch daily profit report"
        )
