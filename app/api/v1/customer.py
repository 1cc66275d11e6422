from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.common.exceptions import NotFoundError, TransactionFailure
from app.core.dependencies import get_db
from app.services.customer_service import (
    get_customer_with_stats,
    get_all_customers,
    create_customer,
    update_customer,
    delete_customer
)
from app.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
    CustomerDeleteResponse
)
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=CustomerListResponse)
def get_customers(
    search: Optional[str] = Query(None, description="Name or house number"),
    db: Session = Depends(get_db)
):
    """
    Get all verisiye customers with their entry count and total credit given.
    """
    try:
        customers = get_all_customers(db, search=search)
        return CustomerListResponse(
            total=len(customers),
            customers=[CustomerResponse(**c) for c in customers]
        )
    except Exception as e:
        logger.error(f"Error fetching customers: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch customers"
        )


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    try:
        return CustomerResponse(**get_customer_with_stats(db, customer_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer_route(customer_data: CustomerCreate, db: Session = Depends(get_db)):
    try:
        customer = create_customer(
            db,
            name=customer_data.name,
            house_no=customer_data.house_no,
            phone=customer_data.phone
        )
        return CustomerResponse(**customer)
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer_route(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db)
):
    try:
        customer = update_customer(
            db,
            customer_id,
            name=customer_data.name,
            house_no=customer_data.house_no,
            phone=customer_data.phone
        )
        return CustomerResponse(**customer)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{customer_id}", response_model=CustomerDeleteResponse)
def delete_customer_route(customer_id: int, db: Session = Depends(get_db)):
    """Delete a customer together with their credit entries."""
    try:
        delete_customer(db, customer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return CustomerDeleteResponse(message="Customer deleted successfully")
