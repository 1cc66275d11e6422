from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.common.exceptions import NotFoundError, TransactionFailure, ValidationError
from app.core.config import settings
from app.core.dependencies import get_db, get_notification_gateway
from app.schemas.customer import (
    VerisiyeTransactionCreate,
    VerisiyeTransactionResponse,
    VerisiyeTransactionListResponse,
    VerisiyeDailyReportResponse,
    VerisiyeCustomerReportRow,
)
from app.schemas.notification import (
    CreditAlertResponse,
    BulkCreditAlertRequest,
    BulkCreditAlertResponse,
)
from app.services.notification_gateway import NotificationGateway
from app.services.notification_service import send_credit_alert, send_bulk_credit_alerts
from app.services.verisiye_service import (
    get_verisiye_transaction_by_id,
    get_all_verisiye_transactions,
    create_verisiye_transaction,
    delete_verisiye_transaction,
    get_daily_verisiye,
    get_verisiye_by_customer,
)
from app.logger_config import logger

router = APIRouter()


# ==================== TRANSACTIONS ====================

@router.get("/transactions", response_model=VerisiyeTransactionListResponse)
def get_verisiye_transactions(
    customer_id: Optional[int] = Query(None),
    house_no: Optional[str] = Query(None),
    name: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db)
):
    try:
        rows, total = get_all_verisiye_transactions(
            db,
            customer_id=customer_id,
            house_no=house_no,
            name=name,
            start_date=start_date,
            end_date=end_date,
            skip=skip,
            limit=limit,
        )
        return VerisiyeTransactionListResponse(
            total=total,
            transactions=[VerisiyeTransactionResponse.model_validate(r) for r in rows],
        )
    except Exception as e:
        logger.error(f"Error fetching verisiye transactions: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch verisiye transactions"
        )


@router.get("/transactions/{transaction_id}", response_model=VerisiyeTransactionResponse)
def get_verisiye_transaction(transaction_id: int, db: Session = Depends(get_db)):
    entry = get_verisiye_transaction_by_id(db, transaction_id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Verisiye transaction not found")
    return VerisiyeTransactionResponse.model_validate(entry)


@router.post("/transactions", response_model=VerisiyeTransactionResponse, status_code=status.HTTP_201_CREATED)
def create_verisiye_transaction_route(data: VerisiyeTransactionCreate, db: Session = Depends(get_db)):
    """Record credit given to a customer; their total_credit grows by the amount."""
    try:
        entry = create_verisiye_transaction(
            db,
            customer_id=data.customer_id,
            amount=data.amount,
            description=data.description,
            created_by=data.created_by,
        )
        return VerisiyeTransactionResponse.model_validate(entry)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/transactions/{transaction_id}")
def delete_verisiye_transaction_route(transaction_id: int, db: Session = Depends(get_db)):
    try:
        delete_verisiye_transaction(db, transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return {"message": "Verisiye transaction deleted successfully"}


# ==================== REPORTS ====================

@router.get("/reports/daily", response_model=VerisiyeDailyReportResponse)
def daily_report(
    target_date: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db)
):
    """Credit given on one day; today (shop time) by default."""
    return VerisiyeDailyReportResponse(**get_daily_verisiye(db, target_date))


@router.get("/reports/by-customer", response_model=List[VerisiyeCustomerReportRow])
def by_customer_report(
    house_no: Optional[str] = Query(None),
    name: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    rows = get_verisiye_by_customer(
        db,
        house_no=house_no,
        name=name,
        start_date=start_date,
        end_date=end_date,
    )
    return [VerisiyeCustomerReportRow(**r) for r in rows]


# ==================== WHATSAPP ALERTS ====================

@router.post("/whatsapp/send/{customer_id}", response_model=CreditAlertResponse)
def send_alert(
    customer_id: int,
    db: Session = Depends(get_db),
    gateway: NotificationGateway = Depends(get_notification_gateway)
):
    """Send one customer their outstanding credit total."""
    try:
        return CreditAlertResponse(**send_credit_alert(db, gateway, customer_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/whatsapp/send-bulk", response_model=BulkCreditAlertResponse)
def send_bulk_alerts(
    data: BulkCreditAlertRequest,
    db: Session = Depends(get_db),
    gateway: NotificationGateway = Depends(get_notification_gateway)
):
    """
    Alert every customer with a phone number, optionally limited to
    ``customer_ids`` and to totals of at least ``min_credit_amount``.
    """
    result = send_bulk_credit_alerts(
        db,
        gateway,
        customer_ids=data.customer_ids,
        min_credit_amount=data.min_credit_amount,
        delay_seconds=settings.NOTIFICATION_BULK_DELAY_SECONDS,
    )
    return BulkCreditAlertResponse(**result)
