from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.common.exceptions import NotFoundError, TransactionFailure
from app.core.dependencies import get_db
from app.models.kasa import ExpenseCategory
from app.schemas.expense_product import (
    ExpenseProductCreate,
    ExpenseProductUpdate,
    ExpenseProductResponse,
    ExpenseProductDeleteResponse,
)
from app.services.expense_product_service import (
    get_active_expense_products,
    create_expense_product,
    update_expense_product,
    retire_expense_product,
)
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=List[ExpenseProductResponse])
def list_expense_products(
    category: Optional[ExpenseCategory] = Query(None, description="kasa, kart or devir"),
    db: Session = Depends(get_db)
):
    """Active expense products, optionally for one category."""
    try:
        products = get_active_expense_products(db, category=category)
        return [ExpenseProductResponse.model_validate(p) for p in products]
    except Exception as e:
        logger.exception("Error fetching expense products")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch expense products"
        )


@router.post("", response_model=ExpenseProductResponse, status_code=status.HTTP_201_CREATED)
def create_expense_product_route(data: ExpenseProductCreate, db: Session = Depends(get_db)):
    try:
        product = create_expense_product(db, name=data.name, category=data.category)
        return ExpenseProductResponse.model_validate(product)
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{product_id}", response_model=ExpenseProductResponse)
def update_expense_product_route(
    product_id: int,
    data: ExpenseProductUpdate,
    db: Session = Depends(get_db)
):
    """Rename, recategorize, or retire/reactivate an expense product."""
    try:
        product = update_expense_product(
            db,
            product_id,
            name=data.name,
            category=data.category,
            status=data.status,
        )
        return ExpenseProductResponse.model_validate(product)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{product_id}", response_model=ExpenseProductDeleteResponse)
def delete_expense_product_route(product_id: int, db: Session = Depends(get_db)):
    """Retire the product; balance sheets that used it keep their lines."""
    try:
        retire_expense_product(db, product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return ExpenseProductDeleteResponse(message="Expense product deleted successfully")
