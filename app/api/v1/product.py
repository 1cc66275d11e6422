from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.common.exceptions import ConflictError, NotFoundError, TransactionFailure
from app.core.dependencies import get_db
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    StockAdjust,
    ProductResponse,
    ProductListResponse,
    ProductDeleteResponse,
)
from app.services.product_service import (
    get_product_by_id,
    get_product_by_barcode,
    get_all_products,
    create_product,
    update_product,
    delete_product,
    adjust_stock,
)
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=ProductListResponse)
def get_products(
    search: Optional[str] = Query(None, description="Name (anywhere) or barcode (prefix)"),
    db: Session = Depends(get_db)
):
    try:
        products = get_all_products(db, search=search)
        return ProductListResponse(
            total=len(products),
            products=[ProductResponse.model_validate(p) for p in products],
        )
    except Exception as e:
        logger.error(f"Error fetching products: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch products"
        )


@router.get("/barcode/{barcode}", response_model=ProductResponse)
def get_product_by_barcode_route(barcode: str, db: Session = Depends(get_db)):
    """Scanner lookup."""
    product = get_product_by_barcode(db, barcode)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return ProductResponse.model_validate(product)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product_route(data: ProductCreate, db: Session = Depends(get_db)):
    try:
        product = create_product(db, **data.model_dump())
        return ProductResponse.model_validate(product)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product_route(product_id: int, data: ProductUpdate, db: Session = Depends(get_db)):
    try:
        product = update_product(db, product_id, **data.model_dump(exclude_unset=True))
        return ProductResponse.model_validate(product)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.patch("/{product_id}/stock", response_model=ProductResponse)
def adjust_stock_route(product_id: int, data: StockAdjust, db: Session = Depends(get_db)):
    """Add (or with a negative quantity, remove) stock."""
    try:
        product = adjust_stock(db, product_id, data.quantity)
        return ProductResponse.model_validate(product)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConflictError, TransactionFailure) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{product_id}", response_model=ProductDeleteResponse)
def delete_product_route(product_id: int, db: Session = Depends(get_db)):
    try:
        delete_product(db, product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ProductDeleteResponse(message="Product deleted successfully")
