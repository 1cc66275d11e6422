from decimal import Decimal

from fastapi.testclient import TestClient

from app.models import Product

PRODUCTS = "/api/v1/products"
TRANSACTIONS = "/api/v1/transactions"


def checkout(client: TestClient, product, quantity: int = 2, **item):
    return client.post(TRANSACTIONS, json={
        "total_amount": str(Decimal("25.00") * quantity),
        "total_profit": str(Decimal("5.00") * quantity),
        "items": [{
            "product_id": product.id, "name": product.name, "quantity": quantity,
            "price_at_sale": "25.00", "cost_at_sale": "20.00", **item,
        }],
    })


# ==================== PRODUCTS ====================

def test_create_and_lookup_by_barcode(client: TestClient) -> None:
    resp = client.post(PRODUCTS, json={"barcode": "869123", "name": "Cay", "price_buy": "50", "price_sell": "65"})
    assert resp.status_code == 201

    found = client.get(f"{PRODUCTS}/barcode/869123")
    assert found.status_code == 200
    assert found.json()["name"] == "Cay"
    assert found.json()["unit"] == "piece"
    assert client.get(f"{PRODUCTS}/barcode/000").status_code == 404


def test_duplicate_barcode_is_rejected(client: TestClient, product) -> None:
    resp = client.post(PRODUCTS, json={"barcode": product.barcode, "name": "Kopya"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Product with this barcode already exists"


def test_search_matches_name_or_barcode_prefix(client: TestClient, product) -> None:
    client.post(PRODUCTS, json={"barcode": "111", "name": "Peynir"})

    assert [p["name"] for p in client.get(PRODUCTS, params={"search": "sut"}).json()["products"]] == ["Sut"]
    assert [p["name"] for p in client.get(PRODUCTS, params={"search": "869"}).json()["products"]] == ["Sut"]
    assert client.get(PRODUCTS).json()["total"] == 2


def test_update_and_adjust_stock(client: TestClient, product) -> None:
    resp = client.put(f"{PRODUCTS}/{product.id}", json={"price_sell": "27.50"})
    assert resp.status_code == 200
    assert Decimal(resp.json()["price_sell"]) == Decimal("27.50")

    resp = client.patch(f"{PRODUCTS}/{product.id}/stock", json={"quantity": -3})
    assert resp.status_code == 200
    assert resp.json()["stock"] == 7


def test_missing_product_returns_404(client: TestClient) -> None:
    assert client.get(f"{PRODUCTS}/42").status_code == 404
    assert client.put(f"{PRODUCTS}/42", json={"name": "x"}).status_code == 404
    assert client.delete(f"{PRODUCTS}/42").status_code == 404


# ==================== TRANSACTIONS ====================

def test_checkout_decrements_stock(client: TestClient, db, product) -> None:
    resp = checkout(client, product, quantity=3)
    assert resp.status_code == 201
    body = resp.json()
    assert len(body["items"]) == 1
    assert Decimal(body["total_amount"]) == Decimal("75")

    db.expire_all()
    assert db.get(Product, product.id).stock == 7


def test_weighed_items_leave_stock_alone(client: TestClient, db, product) -> None:
    checkout(client, product, quantity=1, is_by_weight=True, weight="0.750")

    db.expire_all()
    assert db.get(Product, product.id).stock == 10


def test_checkout_requires_items(client: TestClient) -> None:
    resp = client.post(TRANSACTIONS, json={"total_amount": "0", "total_profit": "0", "items": []})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Transaction must have at least one item"


def test_checkout_with_unknown_product_rolls_back(client: TestClient, db, product) -> None:
    resp = client.post(TRANSACTIONS, json={
        "total_amount": "50", "total_profit": "10",
        "items": [
            {"product_id": product.id, "name": "Sut", "quantity": 1, "price_at_sale": "25", "cost_at_sale": "20"},
            {"product_id": 9999, "name": "Yok", "quantity": 1, "price_at_sale": "25", "cost_at_sale": "20"},
        ],
    })
    assert resp.status_code == 500

    db.expire_all()
    assert db.get(Product, product.id).stock == 10
    assert client.get(TRANSACTIONS).json()["total"] == 0


def test_void_restores_stock(client: TestClient, db, product) -> None:
    sale_id = checkout(client, product, quantity=4).json()["id"]

    resp = client.delete(f"{TRANSACTIONS}/{sale_id}")
    assert resp.status_code == 200
    assert client.get(f"{TRANSACTIONS}/{sale_id}").status_code == 404

    db.expire_all()
    assert db.get(Product, product.id).stock == 10
    assert client.delete(f"{TRANSACTIONS}/{sale_id}").status_code == 404


def test_stats_summary(client: TestClient, product) -> None:
    checkout(client, product, quantity=1)
    checkout(client, product, quantity=3)

    body = client.get(f"{TRANSACTIONS}/stats/summary").json()
    assert body["total_transactions"] == 2
    assert Decimal(body["total_revenue"]) == Decimal("100")
    assert Decimal(body["total_profit"]) == Decimal("20")
    assert Decimal(body["avg_transaction_value"]) == Decimal("50")
