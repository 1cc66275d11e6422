from datetime import datetime
from decimal import Decimal

from fastapi.testclient import TestClient

from app.models import Transaction, TransactionItem

EXPENSE_PRODUCTS = "/api/v1/kasa/expense-products"
REPORTS = "/api/v1/kasa/reports"


# ==================== EXPENSE PRODUCTS ====================

def test_create_and_list_by_category(client: TestClient) -> None:
    for name, category in (("Ekmek", "kasa"), ("Elektrik", "kart"), ("Kira", "devir")):
        resp = client.post(EXPENSE_PRODUCTS, json={"name": name, "category": category})
        assert resp.status_code == 201
        assert resp.json()["status"] == "active"

    assert len(client.get(EXPENSE_PRODUCTS).json()) == 3
    card_only = client.get(EXPENSE_PRODUCTS, params={"category": "kart"}).json()
    assert [p["name"] for p in card_only] == ["Elektrik"]


def test_create_requires_known_category(client: TestClient) -> None:
    resp = client.post(EXPENSE_PRODUCTS, json={"name": "Ekmek", "category": "nakit"})
    assert resp.status_code == 422


def test_delete_retires_instead_of_removing(client: TestClient, expense_products) -> None:
    product_id = expense_products["bread"]
    resp = client.delete(f"{EXPENSE_PRODUCTS}/{product_id}")
    assert resp.status_code == 200

    names = [p["name"] for p in client.get(EXPENSE_PRODUCTS).json()]
    assert "Ekmek" not in names

    # still usable as a reference from historical sheets
    sheet = client.post("/api/v1/kasa/balance-sheets", json={
        "sheet_date": "2025-01-15",
        "expenses": [{
            "expense_product_id": product_id, "expense_type": "kasa_gider",
            "unit_price": "5.00", "total_price": "5.00",
        }],
    })
    assert sheet.status_code == 201
    assert sheet.json()["expenses"][0]["product_name"] == "Ekmek"


def test_update_can_reactivate(client: TestClient, expense_products) -> None:
    product_id = expense_products["rent"]
    client.delete(f"{EXPENSE_PRODUCTS}/{product_id}")

    resp = client.put(f"{EXPENSE_PRODUCTS}/{product_id}", json={"status": "active", "name": "Dukkan Kirasi"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "active"
    assert body["is_active"] is True
    assert body["category"] == "devir"
    assert body["name"] == "Dukkan Kirasi"


def test_update_missing_returns_404(client: TestClient) -> None:
    resp = client.put(f"{EXPENSE_PRODUCTS}/404", json={"name": "x"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Expense product not found"


# ==================== REPORTS ====================

def test_summary_without_sheet(client: TestClient) -> None:
    body = client.get(f"{REPORTS}/summary", params={"date": "2025-01-15"}).json()
    assert body["date"] == "2025-01-15"
    assert body["balance_sheet"] is None
    assert body["expenses_by_type"] == []
    assert Decimal(body["total_shop_purchases"]) == Decimal("0")


def test_summary_totals_expenses_and_purchases(client: TestClient, expense_products) -> None:
    client.post("/api/v1/kasa/balance-sheets", json={
        "sheet_date": "2025-01-15",
        "cash_counted": "100.00",
        "expenses": [
            {"expense_product_id": expense_products["bread"], "expense_type": "kasa_gider",
             "unit_price": "10.00", "total_price": "10.00"},
            {"expense_product_id": expense_products["water"], "expense_type": "kasa_gider",
             "unit_price": "7.50", "total_price": "7.50"},
            {"expense_product_id": expense_products["power"], "expense_type": "kart_gider",
             "unit_price": "40.00", "total_price": "40.00"},
        ],
        "shop_purchases": [
            {"expense_product_id": expense_products["water"], "quantity": 4,
             "unit_cost": "2.50", "total_cost": "10.00"},
        ],
    })

    body = client.get(f"{REPORTS}/summary", params={"date": "2025-01-15"}).json()
    totals = {row["expense_type"]: Decimal(row["total"]) for row in body["expenses_by_type"]}
    assert totals == {"kasa_gider": Decimal("17.50"), "kart_gider": Decimal("40.00")}
    assert Decimal(body["total_shop_purchases"]) == Decimal("10")
    assert Decimal(body["balance_sheet"]["cash_counted"]) == Decimal("100")


def test_daily_profit_groups_by_day_and_product(client: TestClient, db, product) -> None:
    for when, quantity in ((datetime(2025, 1, 15, 9, 0), 2), (datetime(2025, 1, 15, 17, 0), 1)):
        sale = Transaction(date=when, total_amount=Decimal("25.00") * quantity, total_profit=Decimal("5.00") * quantity)
        sale.items.append(TransactionItem(
            product_id=product.id, name="Sut", quantity=quantity,
            price_at_sale=Decimal("25.00"), cost_at_sale=Decimal("20.00"),
        ))
        db.add(sale)
    db.commit()

    body = client.get(f"{REPORTS}/daily-profit", params={"start_date": "2025-01-15", "end_date": "2025-01-15"}).json()
    assert len(body["rows"]) == 1
    row = body["rows"][0]
    assert row["sale_date"] == "2025-01-15"
    assert row["total_quantity"] == 3
    assert Decimal(row["total_revenue"]) == Decimal("75")
    assert Decimal(row["total_cost"]) == Decimal("60")
    assert Decimal(row["total_profit"]) == Decimal("15")
    assert row["barcode"] == "8690000000011"
