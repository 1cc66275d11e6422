from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_
from typing import Optional, List

from app.common.exceptions import ConflictError, NotFoundError, TransactionFailure
from app.models.product import Product
from app.logger_config import logger


def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
    """Get product by database ID."""
    return db.query(Product).filter(Product.id == product_id).first()


def get_product_by_barcode(db: Session, barcode: str) -> Optional[Product]:
    """Get product by exact barcode."""
    return db.query(Product).filter(Product.barcode == barcode).first()


def get_all_products(
    db: Session,
    search: Optional[str] = None
) -> List[Product]:
    """All products, newest first; search matches name anywhere or barcode prefix."""
    query = db.query(Product)

    if search:
        query = query.filter(
            or_(
                Product.name.ilike(f"%{search}%"),
                Product.barcode.like(f"{search}%")
            )
        )

    return query.order_by(Product.id.desc()).all()


def _commit_product(db: Session, product: Product, action: str) -> Product:
    try:
        db.commit()
        db.refresh(product)
        return product
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error on {action} product: {str(e)}")
        raise ConflictError("Product with this barcode already exists")
    except Exception as e:
        db.rollback()
        logger.exception(f"Error on {action} product")
        raise TransactionFailure(f"Failed to {action} product") from e


def create_product(db: Session, **fields) -> Product:
    """Create a product; barcode must be unique."""
    product = Product(**fields)
    db.add(product)
    product = _commit_product(db, product, "create")
    logger.info(f"Product created: {product.name} ({product.barcode})")
    return product


def update_product(db: Session, product_id: int, **fields) -> Product:
    """Update the given fields; None values are ignored."""
    product = get_product_by_id(db, product_id)
    if not product:
        raise NotFoundError("Product not found")

    for key, value in fields.items():
        if value is not None:
            setattr(product, key, value)

    return _commit_product(db, product, "update")


def delete_product(db: Session, product_id: int) -> None:
    product = get_product_by_id(db, product_id)
    if not product:
        raise NotFoundError("Product not found")

    db.delete(product)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error deleting product {product_id}: {str(e)}")
        raise ConflictError("Product is referenced by sales and cannot be deleted")

    logger.info(f"Product deleted: {product_id}")


def adjust_stock(db: Session, product_id: int, quantity: int) -> Product:
    """Add a signed quantity to the product's stock."""
    product = get_product_by_id(db, product_id)
    if not product:
        raise NotFoundError("Product not found")

    stock_before = product.stock
    product.stock = Product.stock + quantity
    product = _commit_product(db, product, "update")

    logger.info(f"Stock updated - Product: {product.name} ({product.id}), Qty: {stock_before} → {product.stock}")
    return product
