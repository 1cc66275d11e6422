from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from typing import Optional, List, Tuple

from app.common.exceptions import NotFoundError, TransactionFailure
from app.models.customer import Customer, VerisiyeTransaction
from app.utils.money import to_money
from app.logger_config import logger


def _with_stats(db: Session):
    """Customers joined with their credit entry count and sum."""
    return (
        db.query(
            Customer,
            func.count(VerisiyeTransaction.id),
            func.coalesce(func.sum(VerisiyeTransaction.amount), 0),
        )
        .outerjoin(VerisiyeTransaction, Customer.id == VerisiyeTransaction.customer_id)
        .group_by(Customer.id)
    )


def _as_row(customer: Customer, count, total) -> dict:
    return {
        "id": customer.id,
        "name": customer.name,
        "house_no": customer.house_no,
        "phone": customer.phone,
        "total_credit": to_money(customer.total_credit),
        "transaction_count": int(count or 0),
        "total_credit_given": to_money(total),
        "created_at": customer.created_at,
        "updated_at": customer.updated_at,
    }


def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def get_customer_with_stats(db: Session, customer_id: int) -> dict:
    """Customer plus transaction_count and total_credit_given."""
    row = _with_stats(db).filter(Customer.id == customer_id).first()
    if not row:
        raise NotFoundError("Customer not found")
    return _as_row(*row)


def get_all_customers(db: Session, search: Optional[str] = None) -> List[dict]:
    """All customers by name; search matches name or house number."""
    query = _with_stats(db)
    if search:
        search_term = f"%{search}%"
        query = query.filter(
            or_(
                Customer.name.ilike(search_term),
                Customer.house_no.ilike(search_term)
            )
        )
    return [_as_row(*row) for row in query.order_by(Customer.name.asc()).all()]


def get_customers_for_alerts(
    db: Session,
    customer_ids: Optional[List[int]] = None,
    min_credit_amount=None
) -> List[Tuple[Customer, object]]:
    """Customers with a phone number and their summed credit, optionally filtered."""
    total = func.coalesce(func.sum(VerisiyeTransaction.amount), 0)
    query = (
        db.query(Customer, total)
        .outerjoin(VerisiyeTransaction, Customer.id == VerisiyeTransaction.customer_id)
        .filter(Customer.phone.isnot(None))
    )
    if customer_ids:
        query = query.filter(Customer.id.in_(customer_ids))
    query = query.group_by(Customer.id)
    if min_credit_amount:
        query = query.having(total >= min_credit_amount)
    return query.order_by(Customer.id).all()


def create_customer(
    db: Session,
    name: str,
    house_no: Optional[str] = None,
    phone: Optional[str] = None
) -> dict:
    customer = Customer(name=name, house_no=house_no, phone=phone, total_credit=0)
    db.add(customer)
    try:
        db.commit()
        db.refresh(customer)
    except Exception as e:
        db.rollback()
        logger.exception("Error creating customer")
        raise TransactionFailure("Failed to create customer") from e

    logger.info(f"Customer created: {customer.id} ({customer.name})")
    return _as_row(customer, 0, 0)


def update_customer(
    db: Session,
    customer_id: int,
    name: Optional[str] = None,
    house_no: Optional[str] = None,
    phone: Optional[str] = None
) -> dict:
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    if name is not None:
        customer.name = name
    if house_no is not None:
        customer.house_no = house_no
    if phone is not None:
        customer.phone = phone

    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Error updating customer {customer_id}")
        raise TransactionFailure("Failed to update customer") from e

    return get_customer_with_stats(db, customer_id)


def delete_customer(db: Session, customer_id: int) -> None:
    """Delete a customer; their credit entries go with them."""
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    db.delete(customer)
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Error deleting customer {customer_id}")
        raise TransactionFailure("Failed to delete customer") from e

    logger.info(f"Customer deleted: {customer_id}")
