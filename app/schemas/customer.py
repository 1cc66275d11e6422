from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

# Alias to avoid field name 'date' shadowing type 'date' in annotations (Pydantic v2)
DateType = date


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    house_no: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    house_no: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)


class CustomerResponse(CustomerBase):
    id: int
    total_credit: Decimal
    transaction_count: int = 0
    total_credit_given: Decimal = Decimal("0.00")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerListResponse(BaseModel):
    total: int
    customers: List[CustomerResponse]


class CustomerDeleteResponse(BaseModel):
    message: str


# ==================== VERISIYE ====================

class VerisiyeTransactionCreate(BaseModel):
    customer_id: int = Field(..., gt=0)
    amount: Decimal
    description: Optional[str] = None
    created_by: Optional[str] = Field(None, max_length=100)


class VerisiyeTransactionResponse(BaseModel):
    id: int
    customer_id: int
    amount: Decimal
    description: Optional[str] = None
    transaction_date: datetime
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    customer_name: Optional[str] = None
    house_no: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class VerisiyeTransactionListResponse(BaseModel):
    total: int
    transactions: List[VerisiyeTransactionResponse]


class VerisiyeDailyReportResponse(BaseModel):
    date: DateType
    transaction_count: int
    total_verisiye: Decimal


class VerisiyeCustomerReportRow(BaseModel):
    id: int
    name: str
    house_no: Optional[str] = None
    phone: Optional[str] = None
    total_credit: Decimal
    transaction_count: int
    total_verisiye: Decimal
