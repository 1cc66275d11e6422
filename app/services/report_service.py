from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.logger_config import logger
from app.models.kasa import BalanceSheetExpense, DailyBalanceSheet, ExpenseType, ShopPurchase
from app.models.product import Product
from app.models.transaction import Transaction, TransactionItem
from app.services.balance_sheet_service import get_balance_sheet_by_date
from app.utils.money import to_money
from app.utils.shop_time import day_bounds, today_local


def get_kasa_summary(db: Session, target_date: Optional[date] = None) -> Dict:
    """Balance sheet, expense totals per type and shop purchase total for one day (default today)."""
    target_date = target_date or today_local()

    sheet = get_balance_sheet_by_date(db, target_date)

    expense_rows = (
        db.query(
            BalanceSheetExpense.expense_type,
            func.coalesce(func.sum(BalanceSheetExpense.total_price), 0),
        )
        .join(DailyBalanceSheet, BalanceSheetExpense.balance_sheet_id == DailyBalanceSheet.id)
        .filter(DailyBalanceSheet.sheet_date == target_date)
        .group_by(BalanceSheetExpense.expense_type)
        .all()
    )

    purchases_total = (
        db.query(func.coalesce(func.sum(ShopPurchase.total_cost), 0))
        .join(DailyBalanceSheet, ShopPurchase.balance_sheet_id == DailyBalanceSheet.id)
        .filter(DailyBalanceSheet.sheet_date == target_date)
        .scalar()
    )

    logger.debug(f"Kasa summary for {target_date}: sheet={'yes' if sheet else 'no'}, expense types={len(expense_rows)}")

    return {
        "date": target_date,
        "balance_sheet": sheet,
        "expenses_by_type": [
            {"expense_type": ExpenseType(expense_type), "total": to_money(total)}
            for expense_type, total in expense_rows
        ],
        "total_shop_purchases": to_money(purchases_total),
    }


def get_daily_profit(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Tuple[date, date, List[Dict]]:
    """
    Per day and product: quantity sold, average sell/buy price, revenue,
    cost and profit. Without dates the report covers today.
    """
    start_date = start_date or end_date or today_local()
    end_date = end_date or start_date
    window_start, _ = day_bounds(start_date)
    _, window_end = day_bounds(end_date)

    sale_date = func.date(Transaction.date)
    revenue = func.sum(TransactionItem.quantity * TransactionItem.price_at_sale)
    cost = func.sum(TransactionItem.quantity * TransactionItem.cost_at_sale)
    profit = func.sum(TransactionItem.quantity * (TransactionItem.price_at_sale - TransactionItem.cost_at_sale))

    rows = (
        db.query(
            sale_date.label("sale_date"),
            TransactionItem.product_id,
            TransactionItem.name,
            Product.barcode,
            func.sum(TransactionItem.quantity),
            func.avg(TransactionItem.price_at_sale),
            func.avg(TransactionItem.cost_at_sale),
            revenue,
            cost,
            profit,
        )
        .join(TransactionItem, Transaction.id == TransactionItem.transaction_id)
        .outerjoin(Product, TransactionItem.product_id == Product.id)
        .filter(Transaction.date >= window_start, Transaction.date < window_end)
        .group_by(sale_date, TransactionItem.product_id, TransactionItem.name, Product.barcode)
        .order_by(sale_date.desc(), profit.desc())
        .all()
    )

    report = [
        {
            "sale_date": row[0],
            "product_id": row[1],
            "product_name": row[2],
            "barcode": row[3],
            "total_quantity": int(row[4] or 0),
            "avg_price_sell": to_money(row[5]),
            "avg_price_buy": to_money(row[6]),
            "total_revenue": to_money(row[7]),
            "total_cost": to_money(row[8]),
            "total_profit": to_money(row[9]),
        }
        for row in rows
    ]
    return start_date, end_date, report
