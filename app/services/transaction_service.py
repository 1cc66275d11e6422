# app/services/transaction_service.py

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func
from typing import List, Optional, Tuple
from datetime import date

from app.common.exceptions import NotFoundError, TransactionFailure, ValidationError
from app.models.product import Product
from app.models.transaction import Transaction, TransactionItem
from app.schemas.transaction import TransactionCreate
from app.utils.money import to_money
from app.utils.shop_time import day_bounds, to_shop_local
from app.logger_config import logger


# ==================== QUERIES ====================

def get_transaction_by_id(db: Session, transaction_id: int) -> Optional[Transaction]:
    """Get a sale with its items."""
    return (
        db.query(Transaction)
        .options(selectinload(Transaction.items))
        .filter(Transaction.id == transaction_id)
        .first()
    )


def get_all_transactions(
    db: Session,
    skip: int = 0,
    limit: int = 100
) -> Tuple[List[Transaction], int]:
    """Sales newest first, with items."""
    query = db.query(Transaction)
    total = query.count()
    transactions = (
        query.options(selectinload(Transaction.items))
        .order_by(Transaction.date.desc(), Transaction.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return transactions, total


def get_transaction_stats(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> dict:
    """Count, revenue, profit and average ticket, optionally over a date range (inclusive)."""
    query = db.query(
        func.count(Transaction.id),
        func.coalesce(func.sum(Transaction.total_amount), 0),
        func.coalesce(func.sum(Transaction.total_profit), 0),
        func.coalesce(func.avg(Transaction.total_amount), 0),
    )
    if start_date is not None:
        query = query.filter(Transaction.date >= day_bounds(start_date)[0])
    if end_date is not None:
        query = query.filter(Transaction.date < day_bounds(end_date)[1])

    count, revenue, profit, average = query.one()
    return {
        "total_transactions": int(count or 0),
        "total_revenue": to_money(revenue),
        "total_profit": to_money(profit),
        "avg_transaction_value": to_money(average),
    }


# ==================== CHECKOUT ====================

def create_transaction(db: Session, data: TransactionCreate) -> Transaction:
    """
    Record a checkout.

    Process:
        1. Insert the transaction (timestamp in shop wall-clock time)
        2. Insert each item
        3. Decrement stock for items not sold by weight
    All in one database transaction.
    """
    if not data.items:
        raise ValidationError("Transaction must have at least one item")

    logger.info(f"Starting checkout - Items: {len(data.items)}, Total: {data.total_amount}")

    try:
        transaction = Transaction(
            date=to_shop_local(data.date),
            total_amount=data.total_amount,
            total_profit=data.total_profit,
        )
        db.add(transaction)
        db.flush()  # get transaction.id for items

        for item in data.items:
            db.add(TransactionItem(
                transaction_id=transaction.id,
                product_id=item.product_id,
                name=item.name,
                quantity=item.quantity,
                price_at_sale=item.price_at_sale,
                cost_at_sale=item.cost_at_sale,
                weight=item.weight,
                is_by_weight=item.is_by_weight,
            ))

            if not item.is_by_weight:
                db.query(Product).filter(Product.id == item.product_id).update(
                    {Product.stock: Product.stock - item.quantity},
                    synchronize_session=False,
                )
            db.flush()

        db.commit()

    except Exception as e:
        db.rollback()
        logger.exception("Error creating transaction")
        raise TransactionFailure("Failed to create transaction") from e

    logger.info(f"✅ Transaction completed: {transaction.id} - Amount: {transaction.total_amount}")
    return get_transaction_by_id(db, transaction.id)


def void_transaction(db: Session, transaction_id: int) -> None:
    """Void a sale: restore stock for non-weight items and delete it (items cascade)."""
    transaction = get_transaction_by_id(db, transaction_id)
    if not transaction:
        raise NotFoundError("Transaction not found")

    try:
        for item in transaction.items:
            if not item.is_by_weight:
                db.query(Product).filter(Product.id == item.product_id).update(
                    {Product.stock: Product.stock + item.quantity},
                    synchronize_session=False,
                )
        db.delete(transaction)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Error voiding transaction {transaction_id}")
        raise TransactionFailure("Failed to void transaction") from e

    logger.info(f"Transaction voided: {transaction_id}")
