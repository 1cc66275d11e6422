from sqlalchemy import Boolean, Column, Date, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from app.core.database import Base


class Product(Base):
    """Sellable inventory item, looked up by barcode at the till."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    barcode = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    price_buy = Column(Numeric(10, 2), nullable=False, default=0)
    price_sell = Column(Numeric(10, 2), nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    category = Column(String(100), nullable=True)
    expire_date = Column(Date, nullable=True)
    is_by_weight = Column(Boolean, default=False)
    price_per_kg = Column(Numeric(10, 2), nullable=True)
    unit = Column(String(10), default="piece")

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Product(barcode='{self.barcode}', name='{self.name}')>"
