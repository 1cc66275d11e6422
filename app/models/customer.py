from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.utils.shop_time import now_local


class Customer(Base):
    """Verisiye (store credit) customer with a running credit balance."""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    house_no = Column(String(100), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    total_credit = Column(Numeric(10, 2), default=0)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    verisiye_transactions = relationship(
        "VerisiyeTransaction",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Customer(id={self.id}, name='{self.name}')>"


class VerisiyeTransaction(Base):
    """One credit entry for a customer; ``amount`` is added to total_credit."""
    __tablename__ = "verisiye_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    transaction_date = Column(DateTime, nullable=False, default=now_local, index=True)
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    customer = relationship("Customer", back_populates="verisiye_transactions")

    @property
    def customer_name(self):
        return self.customer.name if self.customer else None

    @property
    def house_no(self):
        return self.customer.house_no if self.customer else None

    @property
    def phone(self):
        return self.customer.phone if self.customer else None
