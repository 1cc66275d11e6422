"""create products, transactions, verisiye and kasa tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("barcode", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price_buy", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("price_sell", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("expire_date", sa.Date(), nullable=True),
        sa.Column("is_by_weight", sa.Boolean(), nullable=True),
        sa.Column("price_per_kg", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("unit", sa.String(length=10), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_barcode", "products", ["barcode"], unique=True)
    op.create_index("ix_products_name", "products", ["name"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("total_profit", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transactions_date", "transactions", ["date"])

    op.create_table(
        "transaction_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price_at_sale", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("cost_at_sale", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("weight", sa.Numeric(precision=10, scale=3), nullable=True),
        sa.Column("is_by_weight", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["transaction_id"], ["transactions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transaction_items_transaction_id", "transaction_items", ["transaction_id"])

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("house_no", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("total_credit", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_name", "customers", ["name"])
    op.create_index("ix_customers_house_no", "customers", ["house_no"])

    op.create_table(
        "verisiye_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("transaction_date", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_verisiye_transactions_customer_id", "verisiye_transactions", ["customer_id"])
    op.create_index("ix_verisiye_transactions_transaction_date", "verisiye_transactions", ["transaction_date"])

    op.create_table(
        "expense_products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_expense_products_category", "expense_products", ["category"])

    op.create_table(
        "daily_balance_sheets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sheet_date", sa.Date(), nullable=False),
        sa.Column("kasa_sistem", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("verisiye_total", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("kasa_nakit", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("k_kart", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("toplam", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("fark", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("devir_toplam", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_daily_balance_sheets_sheet_date", "daily_balance_sheets", ["sheet_date"], unique=True)

    op.create_table(
        "balance_sheet_expenses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("balance_sheet_id", sa.Integer(), nullable=False),
        sa.Column("expense_product_id", sa.Integer(), nullable=False),
        sa.Column("expense_type", sa.String(length=50), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=True),
        sa.Column("unit_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("total_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["balance_sheet_id"], ["daily_balance_sheets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["expense_product_id"], ["expense_products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_balance_sheet_expenses_balance_sheet_id", "balance_sheet_expenses", ["balance_sheet_id"])
    op.create_index("ix_balance_sheet_expenses_expense_type", "balance_sheet_expenses", ["expense_type"])

    op.create_table(
        "shop_purchases",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("balance_sheet_id", sa.Integer(), nullable=False),
        sa.Column("expense_product_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_cost", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("total_cost", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("supplier", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["balance_sheet_id"], ["daily_balance_sheets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["expense_product_id"], ["expense_products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shop_purchases_balance_sheet_id", "shop_purchases", ["balance_sheet_id"])


def downgrade() -> None:
    op.drop_index("ix_shop_purchases_balance_sheet_id", table_name="shop_purchases")
    op.drop_table("shop_purchases")
    op.drop_index("ix_balance_sheet_expenses_expense_type", table_name="balance_sheet_expenses")
    op.drop_index("ix_balance_sheet_expenses_balance_sheet_id", table_name="balance_sheet_expenses")
    op.drop_table("balance_sheet_expenses")
    op.drop_index("ix_daily_balance_sheets_sheet_date", table_name="daily_balance_sheets")
    op.drop_table("daily_balance_sheets")
    op.drop_index("ix_expense_products_category", table_name="expense_products")
    op.drop_table("expense_products")
    op.drop_index("ix_verisiye_transactions_transaction_date", table_name="verisiye_transactions")
    op.drop_index("ix_verisiye_transactions_customer_id", table_name="verisiye_transactions")
    op.drop_table("verisiye_transactions")
    op.drop_index("ix_customers_house_no", table_name="customers")
    op.drop_index("ix_customers_name", table_name="customers")
    op.drop_table("customers")
    op.drop_index("ix_transaction_items_transaction_id", table_name="transaction_items")
    op.drop_table("transaction_items")
    op.drop_index("ix_transactions_date", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_products_name", table_name="products")
    op.drop_index("ix_products_barcode", table_name="products")
    op.drop_table("products")
