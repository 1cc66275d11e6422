from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.kasa import ExpenseCategory, ExpenseProductStatus


class ExpenseProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: ExpenseCategory


class ExpenseProductCreate(ExpenseProductBase):
    pass


class ExpenseProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[ExpenseCategory] = None
    status: Optional[ExpenseProductStatus] = None


class ExpenseProductResponse(ExpenseProductBase):
    id: int
    status: ExpenseProductStatus
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ExpenseProductDeleteResponse(BaseModel):
    message: str
