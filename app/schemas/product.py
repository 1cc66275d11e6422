from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime


class ProductBase(BaseModel):
    barcode: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    price_buy: Decimal = Field(default=Decimal("0.00"), ge=0)
    price_sell: Decimal = Field(default=Decimal("0.00"), ge=0)
    stock: int = 0
    category: Optional[str] = Field(None, max_length=100)
    expire_date: Optional[date] = None
    is_by_weight: bool = False
    price_per_kg: Optional[Decimal] = Field(None, ge=0)
    unit: str = Field(default="piece", max_length=10)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    barcode: Optional[str] = Field(None, min_length=1, max_length=255)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price_buy: Optional[Decimal] = Field(None, ge=0)
    price_sell: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = None
    category: Optional[str] = Field(None, max_length=100)
    expire_date: Optional[date] = None
    is_by_weight: Optional[bool] = None
    price_per_kg: Optional[Decimal] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=10)


class StockAdjust(BaseModel):
    """Signed quantity added to the current stock."""
    quantity: int


class ProductResponse(ProductBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductListResponse(BaseModel):
    total: int
    products: List[ProductResponse]


class ProductDeleteResponse(BaseModel):
    message: str
