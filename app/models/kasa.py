import enum
from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class ExpenseCategory(str, enum.Enum):
    """Which till an expense product is paid from. Values are the stored codes."""
    cash = "kasa"
    card = "kart"
    carry_forward = "devir"


class ExpenseType(str, enum.Enum):
    """Aggregate bucket an expense line contributes to."""
    cash_expense = "kasa_gider"
    card_expense = "kart_gider"
    carry_forward_expense = "devir_gider"


class ExpenseProductStatus(str, enum.Enum):
    active = "active"
    retired = "retired"


def _stored_values(enum_cls):
    return [member.value for member in enum_cls]


class ExpenseProduct(Base):
    """Catalog entry that expense and purchase lines point at. Retired, never deleted."""
    __tablename__ = "expense_products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    category = Column(
        Enum(ExpenseCategory, values_callable=_stored_values, native_enum=False, length=50,
             create_constraint=False),
        nullable=False,
        index=True,
    )
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    @property
    def status(self) -> ExpenseProductStatus:
        return ExpenseProductStatus.active if self.is_active else ExpenseProductStatus.retired

    @status.setter
    def status(self, value: ExpenseProductStatus):
        self.is_active = ExpenseProductStatus(value) == ExpenseProductStatus.active


class DailyBalanceSheet(Base):
    """
    One day's kasa reconciliation, unique per ``sheet_date``.

    Attribute names are English; column names are the persisted ones
    (kasa_sistem, verisiye_total, kasa_nakit, k_kart, toplam, fark, devir_toplam).
    """
    __tablename__ = "daily_balance_sheets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sheet_date = Column(Date, nullable=False, unique=True, index=True)

    # from transactions
    system_sales = Column("kasa_sistem", Numeric(10, 2), default=0)

    # manual entries
    credit_extended = Column("verisiye_total", Numeric(10, 2), default=0)
    cash_counted = Column("kasa_nakit", Numeric(10, 2), default=0)
    card_terminal_amount = Column("k_kart", Numeric(10, 2), default=0)

    # derived
    computed_total = Column("toplam", Numeric(10, 2), default=0)
    discrepancy = Column("fark", Numeric(10, 2), default=0)
    carry_forward_total = Column("devir_toplam", Numeric(10, 2), default=0)

    notes = Column(Text, nullable=True)
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    expenses = relationship(
        "BalanceSheetExpense",
        back_populates="balance_sheet",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BalanceSheetExpense.id",
    )
    shop_purchases = relationship(
        "ShopPurchase",
        back_populates="balance_sheet",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ShopPurchase.id",
    )

    def __repr__(self):
        return f"<DailyBalanceSheet(sheet_date={self.sheet_date}, fark={self.discrepancy})>"


class BalanceSheetExpense(Base):
    __tablename__ = "balance_sheet_expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    balance_sheet_id = Column(
        Integer, ForeignKey("daily_balance_sheets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expense_product_id = Column(Integer, ForeignKey("expense_products.id"), nullable=False)
    expense_type = Column(
        Enum(ExpenseType, values_callable=_stored_values, native_enum=False, length=50,
             create_constraint=False),
        nullable=False,
        index=True,
    )
    quantity = Column(Integer, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    balance_sheet = relationship("DailyBalanceSheet", back_populates="expenses")
    expense_product = relationship("ExpenseProduct", lazy="joined")

    @property
    def product_name(self):
        return self.expense_product.name if self.expense_product else None

    @property
    def category(self):
        return self.expense_product.category if self.expense_product else None


class ShopPurchase(Base):
    """Restocking purchase recorded on a sheet; not part of the kasa totals."""
    __tablename__ = "shop_purchases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    balance_sheet_id = Column(
        Integer, ForeignKey("daily_balance_sheets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expense_product_id = Column(Integer, ForeignKey("expense_products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_cost = Column(Numeric(10, 2), nullable=False)
    total_cost = Column(Numeric(10, 2), nullable=False)
    supplier = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    balance_sheet = relationship("DailyBalanceSheet", back_populates="shop_purchases")
    expense_product = relationship("ExpenseProduct", lazy="joined")

    @property
    def product_name(self):
        return self.expense_product.name if self.expense_product else None
