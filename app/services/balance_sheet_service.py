# app/services/balance_sheet_service.py
"""
Daily balance sheet (kasa) reconciliation.

A sheet is created or fully replaced by ``submit_day``:

    toplam       = kasa_nakit + k_kart + kasa_gider
    fark         = kasa_sistem - toplam
    devir_toplam = yesterday.devir_toplam - devir_gider + kasa_nakit

where kasa_sistem is the day's sales total and the *_gider values are the
summed expense lines of each type. All reads and writes of one submission
run in a single database transaction.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.common.exceptions import NotFoundError, TransactionFailure, ValidationError
from app.logger_config import logger
from app.models.kasa import (
    BalanceSheetExpense,
    DailyBalanceSheet,
    ExpenseProduct,
    ExpenseType,
    ShopPurchase,
)
from app.models.transaction import Transaction
from app.schemas.balance_sheet import BalanceSheetSubmit
from app.utils.money import to_money
from app.utils.shop_time import day_bounds


# ==================== CALCULATION ====================

@dataclass(frozen=True)
class DayFigures:
    system_sales: Decimal
    cash_expense_total: Decimal
    card_expense_total: Decimal
    carry_forward_expense_total: Decimal
    computed_total: Decimal
    discrepancy: Decimal
    carry_forward_total: Decimal


def sum_expenses_by_type(lines: Iterable) -> Dict[ExpenseType, Decimal]:
    """Total of ``total_price`` per expense type; every type is present, empty ones are 0."""
    totals = {expense_type: Decimal("0.00") for expense_type in ExpenseType}
    for line in lines:
        totals[ExpenseType(line.expense_type)] += to_money(line.total_price)
    return totals


def compute_day_figures(
    system_sales: Decimal,
    cash_counted: Decimal,
    card_terminal_amount: Decimal,
    expense_totals: Dict[ExpenseType, Decimal],
    previous_carry_forward: Decimal,
) -> DayFigures:
    cash_expense = expense_totals[ExpenseType.cash_expense]
    card_expense = expense_totals[ExpenseType.card_expense]
    carry_expense = expense_totals[ExpenseType.carry_forward_expense]

    computed_total = to_money(cash_counted) + to_money(card_terminal_amount) + cash_expense
    discrepancy = to_money(system_sales) - computed_total
    carry_forward_total = to_money(previous_carry_forward) - carry_expense + to_money(cash_counted)

    return DayFigures(
        system_sales=to_money(system_sales),
        cash_expense_total=cash_expense,
        card_expense_total=card_expense,
        carry_forward_expense_total=carry_expense,
        computed_total=computed_total,
        discrepancy=discrepancy,
        carry_forward_total=carry_forward_total,
    )


# ==================== STORE LOOKUPS ====================

def get_system_sales(db: Session, sheet_date: date) -> Decimal:
    """Sum of transaction totals within the shop-local calendar day."""
    start, end = day_bounds(sheet_date)
    total = (
        db.query(func.coalesce(func.sum(Transaction.total_amount), 0))
        .filter(Transaction.date >= start, Transaction.date < end)
        .scalar()
    )
    return to_money(total)


def get_previous_carry_forward(db: Session, sheet_date: date) -> Decimal:
    """devir_toplam of the previous calendar day, 0 when that day has no sheet."""
    previous = (
        db.query(DailyBalanceSheet.carry_forward_total)
        .filter(DailyBalanceSheet.sheet_date == sheet_date - timedelta(days=1))
        .scalar()
    )
    return to_money(previous)


def get_balance_sheet_by_date(db: Session, sheet_date: date) -> Optional[DailyBalanceSheet]:
    return db.query(DailyBalanceSheet).filter(DailyBalanceSheet.sheet_date == sheet_date).first()


# ==================== UPSERT ====================

def _column_name(attribute: str) -> str:
    return DailyBalanceSheet.__mapper__.get_property(attribute).columns[0].key


def _upsert_sheet(db: Session, values: Dict[str, object]) -> None:
    """Insert the sheet or overwrite every given field of the existing row for that date."""
    table = DailyBalanceSheet.__table__
    row = {_column_name(attr): value for attr, value in values.items()}
    overwrite = [name for name in row if name != "sheet_date"]
    dialect = db.get_bind().dialect.name

    if dialect in ("postgresql", "sqlite"):
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        stmt = insert(table).values(**row)
        set_ = {name: stmt.excluded[name] for name in overwrite}
        set_["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(index_elements=[table.c.sheet_date], set_=set_)
    elif dialect in ("mysql", "mariadb"):
        stmt = mysql_insert(table).values(**row)
        set_ = {name: stmt.inserted[name] for name in overwrite}
        set_["updated_at"] = func.now()
        stmt = stmt.on_duplicate_key_update(**set_)
    else:
        raise ValueError(f"Upsert not supported for dialect '{dialect}'")

    db.execute(stmt)


# ==================== OPERATIONS ====================

def submit_day(db: Session, data: BalanceSheetSubmit) -> DailyBalanceSheet:
    """
    Create or fully replace the balance sheet for ``data.sheet_date``.

    Process:
        1. Sum the day's sales (kasa_sistem)
        2. Total the expense lines per type
        3-4. toplam and fark
        5-6. devir_toplam chained from the previous day's sheet
        7. Upsert the sheet row by date
        8. Replace its expense and purchase lines
        9. Commit, or roll back everything on any error

    Raises:
        ValidationError: sheet_date missing (nothing touched)
        TransactionFailure: any store error; the store is left as before
    """
    if data.sheet_date is None:
        raise ValidationError("sheet_date is required")

    sheet_date = data.sheet_date
    cash_counted = to_money(data.cash_counted)
    card_terminal_amount = to_money(data.card_terminal_amount)

    logger.info(
        f"Submitting balance sheet {sheet_date} - "
        f"Expenses: {len(data.expenses)}, Purchases: {len(data.shop_purchases)}, By: {data.created_by}"
    )

    try:
        system_sales = get_system_sales(db, sheet_date)
        expense_totals = sum_expenses_by_type(data.expenses)
        previous_carry_forward = get_previous_carry_forward(db, sheet_date)

        figures = compute_day_figures(
            system_sales=system_sales,
            cash_counted=cash_counted,
            card_terminal_amount=card_terminal_amount,
            expense_totals=expense_totals,
            previous_carry_forward=previous_carry_forward,
        )
        logger.debug(
            f"Sheet {sheet_date}: kasa_sistem={figures.system_sales}, toplam={figures.computed_total}, "
            f"fark={figures.discrepancy}, devir {previous_carry_forward} -> {figures.carry_forward_total}"
        )

        _upsert_sheet(db, {
            "sheet_date": sheet_date,
            "system_sales": figures.system_sales,
            "credit_extended": to_money(data.credit_extended),
            "cash_counted": cash_counted,
            "card_terminal_amount": card_terminal_amount,
            "computed_total": figures.computed_total,
            "discrepancy": figures.discrepancy,
            "carry_forward_total": figures.carry_forward_total,
            "notes": data.notes,
            "created_by": data.created_by,
        })

        sheet = (
            db.query(DailyBalanceSheet)
            .populate_existing()
            .filter(DailyBalanceSheet.sheet_date == sheet_date)
            .one()
        )

        db.query(BalanceSheetExpense).filter(
            BalanceSheetExpense.balance_sheet_id == sheet.id
        ).delete(synchronize_session=False)
        db.query(ShopPurchase).filter(
            ShopPurchase.balance_sheet_id == sheet.id
        ).delete(synchronize_session=False)

        for line in data.expenses:
            db.add(BalanceSheetExpense(
                balance_sheet_id=sheet.id,
                expense_product_id=line.expense_product_id,
                expense_type=line.expense_type,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total_price=line.total_price,
                notes=line.notes,
            ))
            # flush per line so a bad expense_product_id fails here, not at commit
            db.flush()

        for line in data.shop_purchases:
            db.add(ShopPurchase(
                balance_sheet_id=sheet.id,
                expense_product_id=line.expense_product_id,
                quantity=line.quantity,
                unit_cost=line.unit_cost,
                total_cost=line.total_cost,
                supplier=line.supplier,
                notes=line.notes,
            ))
            db.flush()

        db.commit()

    except Exception as e:
        db.rollback()
        logger.exception(f"Error creating/updating balance sheet {sheet_date}")
        raise TransactionFailure("Failed to create/update balance sheet") from e

    db.refresh(sheet)
    logger.info(
        f"Balance sheet saved: {sheet_date} (id={sheet.id}) - "
        f"toplam={sheet.computed_total}, fark={sheet.discrepancy}, devir_toplam={sheet.carry_forward_total}"
    )
    return sheet


def get_day(
    db: Session, sheet_date: date
) -> Tuple[DailyBalanceSheet, List[BalanceSheetExpense], List[ShopPurchase]]:
    """Sheet with its expense lines (by type, product name) and purchases (by product name)."""
    sheet = get_balance_sheet_by_date(db, sheet_date)
    if not sheet:
        raise NotFoundError("Balance sheet not found")

    expenses = (
        db.query(BalanceSheetExpense)
        .join(ExpenseProduct, BalanceSheetExpense.expense_product_id == ExpenseProduct.id)
        .filter(BalanceSheetExpense.balance_sheet_id == sheet.id)
        .order_by(BalanceSheetExpense.expense_type, ExpenseProduct.name, BalanceSheetExpense.id)
        .all()
    )
    purchases = (
        db.query(ShopPurchase)
        .join(ExpenseProduct, ShopPurchase.expense_product_id == ExpenseProduct.id)
        .filter(ShopPurchase.balance_sheet_id == sheet.id)
        .order_by(ExpenseProduct.name, ShopPurchase.id)
        .all()
    )
    return sheet, expenses, purchases


def list_days(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 30,
) -> Tuple[List[DailyBalanceSheet], int]:
    """Sheets in an optional date range, newest first."""
    query = db.query(DailyBalanceSheet)
    if start_date is not None:
        query = query.filter(DailyBalanceSheet.sheet_date >= start_date)
    if end_date is not None:
        query = query.filter(DailyBalanceSheet.sheet_date <= end_date)

    total = query.count()
    rows = query.order_by(DailyBalanceSheet.sheet_date.desc()).offset(skip).limit(limit).all()
    return rows, total


def delete_day(db: Session, sheet_date: date) -> None:
    """
    Delete a sheet and, through the FK cascade, its lines.

    The next day's devir_toplam was computed from this sheet and is left as
    stored; resubmit that day to recompute it.
    """
    sheet = get_balance_sheet_by_date(db, sheet_date)
    if not sheet:
        raise NotFoundError("Balance sheet not found")

    try:
        db.delete(sheet)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Error deleting balance sheet {sheet_date}")
        raise TransactionFailure("Failed to delete balance sheet") from e

    logger.info(f"Balance sheet deleted: {sheet_date}")
