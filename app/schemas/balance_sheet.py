from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime

from app.models.kasa import ExpenseCategory, ExpenseType


# ============================================================================
# Request Schemas
# ============================================================================

class ExpenseLineCreate(BaseModel):
    """Expense line; ``expense_type`` decides which bucket total_price goes to."""
    expense_product_id: int
    expense_type: ExpenseType
    quantity: int = Field(default=1, ge=0)
    unit_price: Decimal = Field(..., max_digits=10, decimal_places=2)
    total_price: Decimal = Field(..., max_digits=10, decimal_places=2)
    notes: Optional[str] = None


class PurchaseLineCreate(BaseModel):
    expense_product_id: int
    quantity: int = Field(..., ge=0)
    unit_cost: Decimal = Field(..., max_digits=10, decimal_places=2)
    total_cost: Decimal = Field(..., max_digits=10, decimal_places=2)
    supplier: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class BalanceSheetSubmit(BaseModel):
    """
    Input for submitting a day. Only manual entries and line items are
    accepted; kasa_sistem / toplam / fark / devir_toplam are always
    recomputed server-side and anything the client sends for them is dropped.

    ``sheet_date`` is optional here so that a missing date is reported by
    the service as a validation error (400) rather than a schema error.
    """
    sheet_date: Optional[date] = None
    credit_extended: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    cash_counted: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    card_terminal_amount: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    notes: Optional[str] = None
    created_by: Optional[str] = Field(None, max_length=100)
    expenses: List[ExpenseLineCreate] = Field(default_factory=list)
    shop_purchases: List[PurchaseLineCreate] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "sheet_date": "2025-01-15",
                "credit_extended": 120.00,
                "cash_counted": 400.00,
                "card_terminal_amount": 500.00,
                "created_by": "kasiyer",
                "expenses": [
                    {"expense_product_id": 1, "expense_type": "kasa_gider",
                     "quantity": 1, "unit_price": 50.00, "total_price": 50.00}
                ],
                "shop_purchases": [
                    {"expense_product_id": 2, "quantity": 10, "unit_cost": 3.50,
                     "total_cost": 35.00, "supplier": "Toptanci"}
                ],
            }
        }


# ============================================================================
# Response Schemas
# ============================================================================

class BalanceSheetResponse(BaseModel):
    id: int
    sheet_date: date
    system_sales: Decimal
    credit_extended: Decimal
    cash_counted: Decimal
    card_terminal_amount: Decimal
    computed_total: Decimal
    discrepancy: Decimal
    carry_forward_total: Decimal
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ExpenseLineResponse(BaseModel):
    id: int
    expense_product_id: int
    expense_type: ExpenseType
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    notes: Optional[str] = None
    product_name: Optional[str] = None
    category: Optional[ExpenseCategory] = None

    class Config:
        from_attributes = True


class PurchaseLineResponse(BaseModel):
    id: int
    expense_product_id: int
    quantity: int
    unit_cost: Decimal
    total_cost: Decimal
    supplier: Optional[str] = None
    notes: Optional[str] = None
    product_name: Optional[str] = None

    class Config:
        from_attributes = True


class BalanceSheetDetailResponse(BalanceSheetResponse):
    expenses: List[ExpenseLineResponse] = []
    shop_purchases: List[PurchaseLineResponse] = []


class BalanceSheetListResponse(BaseModel):
    total: int
    balance_sheets: List[BalanceSheetResponse]


class BalanceSheetDeleteResponse(BaseModel):
    message: str
