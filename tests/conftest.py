import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("NOTIFICATION_PROVIDER", "mock")
os.environ.setdefault("NOTIFICATION_BULK_DELAY_SECONDS", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import (  # noqa: E402
    Customer,
    ExpenseCategory,
    ExpenseProduct,
    Product,
    Transaction,
)


def _reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_db():
    _reset_db()
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def expense_products(db):
    """One product per category plus a spare cash one, keyed by short name."""
    products = {
        "bread": ExpenseProduct(name="Ekmek", category=ExpenseCategory.cash, is_active=True),
        "water": ExpenseProduct(name="Su", category=ExpenseCategory.cash, is_active=True),
        "power": ExpenseProduct(name="Elektrik", category=ExpenseCategory.card, is_active=True),
        "rent": ExpenseProduct(name="Kira", category=ExpenseCategory.carry_forward, is_active=True),
    }
    db.add_all(products.values())
    db.commit()
    return {key: product.id for key, product in products.items()}


@pytest.fixture()
def product(db):
    item = Product(
        barcode="8690000000011",
        name="Sut",
        price_buy=Decimal("20.00"),
        price_sell=Decimal("25.00"),
        stock=10,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@pytest.fixture()
def add_sale(db):
    """Insert a bare transaction at a shop wall-clock timestamp."""
    def _add(when: datetime, amount: str) -> Transaction:
        sale = Transaction(date=when, total_amount=Decimal(amount), total_profit=Decimal("0"))
        db.add(sale)
        db.commit()
        return sale
    return _add


@pytest.fixture()
def customer(db):
    person = Customer(name="Ayse Yilmaz", house_no="12", phone="0555 123 45 67", total_credit=0)
    db.add(person)
    db.commit()
    db.refresh(person)
    return person
