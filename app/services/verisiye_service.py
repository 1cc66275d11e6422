# app/services/verisiye_service.py
"""Store credit (verisiye) entries and their reports."""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.orm import Session, joinedload

from app.common.exceptions import NotFoundError, TransactionFailure
from app.logger_config import logger
from app.models.customer import Customer, VerisiyeTransaction
from app.services.customer_service import get_customer_by_id
from app.utils.money import to_money
from app.utils.shop_time import day_bounds, today_local


def get_verisiye_transaction_by_id(db: Session, transaction_id: int) -> Optional[VerisiyeTransaction]:
    return (
        db.query(VerisiyeTransaction)
        .options(joinedload(VerisiyeTransaction.customer))
        .filter(VerisiyeTransaction.id == transaction_id)
        .first()
    )


def get_all_verisiye_transactions(
    db: Session,
    customer_id: Optional[int] = None,
    house_no: Optional[str] = None,
    name: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
) -> Tuple[List[VerisiyeTransaction], int]:
    """Credit entries newest first, filtered by customer, house number, name or date range."""
    query = (
        db.query(VerisiyeTransaction)
        .join(Customer, VerisiyeTransaction.customer_id == Customer.id)
        .options(joinedload(VerisiyeTransaction.customer))
    )
    if customer_id:
        query = query.filter(VerisiyeTransaction.customer_id == customer_id)
    if house_no:
        query = query.filter(Customer.house_no.ilike(f"%{house_no}%"))
    if name:
        query = query.filter(Customer.name.ilike(f"%{name}%"))
    if start_date is not None:
        query = query.filter(VerisiyeTransaction.transaction_date >= day_bounds(start_date)[0])
    if end_date is not None:
        query = query.filter(VerisiyeTransaction.transaction_date < day_bounds(end_date)[1])

    total = query.count()
    rows = (
        query.order_by(VerisiyeTransaction.transaction_date.desc(), VerisiyeTransaction.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return rows, total


def create_verisiye_transaction(
    db: Session,
    customer_id: int,
    amount: Decimal,
    description: Optional[str] = None,
    created_by: Optional[str] = None,
) -> VerisiyeTransaction:
    """Record credit given to a customer and add it to their total_credit, atomically."""
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    try:
        entry = VerisiyeTransaction(
            customer_id=customer_id,
            amount=amount,
            description=description,
            created_by=created_by,
        )
        db.add(entry)
        db.query(Customer).filter(Customer.id == customer_id).update(
            {Customer.total_credit: Customer.total_credit + amount},
            synchronize_session=False,
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Error creating verisiye transaction for customer {customer_id}")
        raise TransactionFailure("Failed to create verisiye transaction") from e

    logger.info(f"Verisiye recorded - Customer: {customer.name} ({customer_id}), Amount: {amount}, By: {created_by}")
    return get_verisiye_transaction_by_id(db, entry.id)


def delete_verisiye_transaction(db: Session, transaction_id: int) -> None:
    """Remove a credit entry and subtract it from the customer's total_credit, atomically."""
    entry = get_verisiye_transaction_by_id(db, transaction_id)
    if not entry:
        raise NotFoundError("Verisiye transaction not found")

    try:
        db.query(Customer).filter(Customer.id == entry.customer_id).update(
            {Customer.total_credit: Customer.total_credit - entry.amount},
            synchronize_session=False,
        )
        db.delete(entry)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Error deleting verisiye transaction {transaction_id}")
        raise TransactionFailure("Failed to delete verisiye transaction") from e

    logger.info(f"Verisiye transaction deleted: {transaction_id}")


# ==================== REPORTS ====================

def get_daily_verisiye(db: Session, target_date: Optional[date] = None) -> dict:
    """Count and total of credit given on one shop-local day (default today)."""
    target_date = target_date or today_local()
    start, end = day_bounds(target_date)
    count, total = (
        db.query(
            func.count(VerisiyeTransaction.id),
            func.coalesce(func.sum(VerisiyeTransaction.amount), 0),
        )
        .filter(
            VerisiyeTransaction.transaction_date >= start,
            VerisiyeTransaction.transaction_date < end,
        )
        .one()
    )
    return {
        "date": target_date,
        "transaction_count": int(count or 0),
        "total_verisiye": to_money(total),
    }


def get_verisiye_by_customer(
    db: Session,
    house_no: Optional[str] = None,
    name: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[dict]:
    """Per customer: running total_credit plus count/sum of entries in the date range, largest first."""
    join_on = [Customer.id == VerisiyeTransaction.customer_id]
    if start_date is not None:
        join_on.append(VerisiyeTransaction.transaction_date >= day_bounds(start_date)[0])
    if end_date is not None:
        join_on.append(VerisiyeTransaction.transaction_date < day_bounds(end_date)[1])

    total = func.coalesce(func.sum(VerisiyeTransaction.amount), 0)
    query = (
        db.query(Customer, func.count(VerisiyeTransaction.id), total)
        .outerjoin(VerisiyeTransaction, and_(*join_on))
    )
    if house_no:
        query = query.filter(Customer.house_no.ilike(f"%{house_no}%"))
    if name:
        query = query.filter(Customer.name.ilike(f"%{name}%"))

    rows = query.group_by(Customer.id).order_by(total.desc(), Customer.name).all()
    return [
        {
            "id": customer.id,
            "name": customer.name,
            "house_no": customer.house_no,
            "phone": customer.phone,
            "total_credit": to_money(customer.total_credit),
            "transaction_count": int(count or 0),
            "total_verisiye": to_money(amount),
        }
        for customer, count, amount in rows
    ]
