# app/models/__init__.py
from .product import Product
from .transaction import Transaction, TransactionItem
from .customer import Customer, VerisiyeTransaction
from .kasa import (
    ExpenseCategory,
    ExpenseType,
    ExpenseProductStatus,
    ExpenseProduct,
    DailyBalanceSheet,
    BalanceSheetExpense,
    ShopPurchase,
)
