from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional


class AlertCustomer(BaseModel):
    id: int
    name: str
    phone: str
    amount: Decimal


class CreditAlertResponse(BaseModel):
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    customer: AlertCustomer


class BulkCreditAlertRequest(BaseModel):
    customer_ids: Optional[List[int]] = None
    min_credit_amount: Optional[Decimal] = Field(None, ge=0)


class BulkAlertResult(BaseModel):
    customer_id: int
    customer_name: str
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class BulkCreditAlertResponse(BaseModel):
    message: str
    sent: int
    total: int
    results: List[BulkAlertResult]
