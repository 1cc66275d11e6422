from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.utils.shop_time import now_local


class Transaction(Base):
    """A completed checkout. ``date`` is shop wall-clock time (naive)."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, default=now_local, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    total_profit = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    items = relationship(
        "TransactionItem",
        back_populates="transaction",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TransactionItem.id",
    )


class TransactionItem(Base):
    __tablename__ = "transaction_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price_at_sale = Column(Numeric(10, 2), nullable=False)
    cost_at_sale = Column(Numeric(10, 2), nullable=False)
    weight = Column(Numeric(10, 3), nullable=True)
    is_by_weight = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())

    transaction = relationship("Transaction", back_populates="items")
    product = relationship("Product")
