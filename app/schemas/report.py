from decimal import Decimal
from pydantic import BaseModel
from typing import List, Optional
from datetime import date

from app.models.kasa import ExpenseType
from app.schemas.balance_sheet import BalanceSheetResponse

# Alias to avoid field name 'date' shadowing type 'date' in annotations (Pydantic v2)
DateType = date


class ExpenseTypeTotal(BaseModel):
    expense_type: ExpenseType
    total: Decimal


class KasaSummaryResponse(BaseModel):
    """Sheet (if submitted) plus line totals for one day."""
    date: DateType
    balance_sheet: Optional[BalanceSheetResponse] = None
    expenses_by_type: List[ExpenseTypeTotal]
    total_shop_purchases: Decimal


class DailyProfitRow(BaseModel):
    sale_date: DateType
    product_id: int
    product_name: str
    barcode: Optional[str] = None
    total_quantity: int
    avg_price_sell: Decimal
    avg_price_buy: Decimal
    total_revenue: Decimal
    total_cost: Decimal
    total_profit: Decimal


class DailyProfitResponse(BaseModel):
    start_date: DateType
    end_date: DateType
    rows: List[DailyProfitRow]
