from sqlalchemy.orm import Session
from typing import Optional, List

from app.common.exceptions import NotFoundError, TransactionFailure
from app.models.kasa import ExpenseCategory, ExpenseProduct, ExpenseProductStatus
from app.logger_config import logger


def get_expense_product_by_id(db: Session, product_id: int) -> Optional[ExpenseProduct]:
    """Get expense product by ID, active or retired."""
    return db.query(ExpenseProduct).filter(ExpenseProduct.id == product_id).first()


def get_active_expense_products(
    db: Session,
    category: Optional[ExpenseCategory] = None
) -> List[ExpenseProduct]:
    """Active expense products ordered by category then name."""
    query = db.query(ExpenseProduct).filter(ExpenseProduct.is_active.is_(True))
    if category is not None:
        query = query.filter(ExpenseProduct.category == category)
    return query.order_by(ExpenseProduct.category, ExpenseProduct.name).all()


def create_expense_product(db: Session, name: str, category: ExpenseCategory) -> ExpenseProduct:
    product = ExpenseProduct(name=name, category=category, is_active=True)
    db.add(product)
    try:
        db.commit()
        db.refresh(product)
    except Exception as e:
        db.rollback()
        logger.exception("Error creating expense product")
        raise TransactionFailure("Failed to create expense product") from e

    logger.info(f"Expense product created: {product.name} ({product.category.value})")
    return product


def update_expense_product(
    db: Session,
    product_id: int,
    name: Optional[str] = None,
    category: Optional[ExpenseCategory] = None,
    status: Optional[ExpenseProductStatus] = None
) -> ExpenseProduct:
    """Partial update; fields left as None keep their value."""
    product = get_expense_product_by_id(db, product_id)
    if not product:
        raise NotFoundError("Expense product not found")

    if name is not None:
        product.name = name
    if category is not None:
        product.category = category
    if status is not None:
        product.status = status

    try:
        db.commit()
        db.refresh(product)
        return product
    except Exception as e:
        db.rollback()
        logger.exception(f"Error updating expense product {product_id}")
        raise TransactionFailure("Failed to update expense product") from e


def retire_expense_product(db: Session, product_id: int) -> ExpenseProduct:
    """Soft delete: old balance sheet lines keep pointing at the product."""
    product = update_expense_product(db, product_id, status=ExpenseProductStatus.retired)
    logger.info(f"Expense product retired: {product.id} ({product.name})")
    return product
