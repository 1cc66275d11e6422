from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class TransactionItemCreate(BaseModel):
    product_id: int
    name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(default=1, ge=1)
    price_at_sale: Decimal
    cost_at_sale: Decimal
    weight: Optional[Decimal] = None
    is_by_weight: bool = False


class TransactionCreate(BaseModel):
    """Checkout. ``date`` defaults to now; aware timestamps are converted to shop time."""
    date: Optional[datetime] = None
    total_amount: Decimal
    total_profit: Decimal
    items: List[TransactionItemCreate] = Field(default_factory=list)


class TransactionItemResponse(BaseModel):
    id: int
    product_id: int
    name: str
    quantity: int
    price_at_sale: Decimal
    cost_at_sale: Decimal
    weight: Optional[Decimal] = None
    is_by_weight: bool

    class Config:
        from_attributes = True


class TransactionResponse(BaseModel):
    id: int
    date: datetime
    total_amount: Decimal
    total_profit: Decimal
    created_at: Optional[datetime] = None
    items: List[TransactionItemResponse] = []

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    total: int
    transactions: List[TransactionResponse]


class TransactionStatsResponse(BaseModel):
    total_transactions: int
    total_revenue: Decimal
    total_profit: Decimal
    avg_transaction_value: Decimal


class TransactionDeleteResponse(BaseModel):
    message: str
