from datetime import datetime
from decimal import Decimal

from fastapi.testclient import TestClient

from app.models import Customer, VerisiyeTransaction

CUSTOMERS = "/api/v1/verisiye/customers"
ENTRIES = "/api/v1/verisiye/transactions"


def give_credit(client: TestClient, customer_id: int, amount: str):
    return client.post(ENTRIES, json={"customer_id": customer_id, "amount": amount, "created_by": "kasiyer"})


def test_customer_crud(client: TestClient) -> None:
    resp = client.post(CUSTOMERS, json={"name": "Mehmet Kaya", "house_no": "7A", "phone": "05321112233"})
    assert resp.status_code == 201
    customer_id = resp.json()["id"]
    assert Decimal(resp.json()["total_credit"]) == Decimal("0")

    resp = client.put(f"{CUSTOMERS}/{customer_id}", json={"house_no": "7B"})
    assert resp.json()["house_no"] == "7B"
    assert resp.json()["name"] == "Mehmet Kaya"

    assert client.get(CUSTOMERS, params={"search": "7b"}).json()["total"] == 1
    assert client.delete(f"{CUSTOMERS}/{customer_id}").status_code == 200
    assert client.get(f"{CUSTOMERS}/{customer_id}").status_code == 404


def test_credit_entries_update_total_credit(client: TestClient, customer) -> None:
    give_credit(client, customer.id, "120.50")
    second = give_credit(client, customer.id, "30.00")
    assert second.status_code == 201
    assert second.json()["customer_name"] == "Ayse Yilmaz"

    body = client.get(f"{CUSTOMERS}/{customer.id}").json()
    assert Decimal(body["total_credit"]) == Decimal("150.50")
    assert body["transaction_count"] == 2
    assert Decimal(body["total_credit_given"]) == Decimal("150.50")

    client.delete(f"{ENTRIES}/{second.json()['id']}")
    body = client.get(f"{CUSTOMERS}/{customer.id}").json()
    assert Decimal(body["total_credit"]) == Decimal("120.50")
    assert body["transaction_count"] == 1


def test_credit_for_unknown_customer_returns_404(client: TestClient) -> None:
    resp = give_credit(client, 999, "10.00")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Customer not found"


def test_delete_customer_removes_entries(client: TestClient, db, customer) -> None:
    give_credit(client, customer.id, "10.00")
    client.delete(f"{CUSTOMERS}/{customer.id}")
    assert db.query(VerisiyeTransaction).count() == 0


def test_entry_list_filters(client: TestClient, db, customer) -> None:
    other = Customer(name="Ali Demir", house_no="3", total_credit=0)
    db.add(other)
    db.commit()

    db.add_all([
        VerisiyeTransaction(customer_id=customer.id, amount=Decimal("10"), transaction_date=datetime(2025, 1, 14, 20, 0)),
        VerisiyeTransaction(customer_id=customer.id, amount=Decimal("20"), transaction_date=datetime(2025, 1, 15, 9, 0)),
        VerisiyeTransaction(customer_id=other.id, amount=Decimal("40"), transaction_date=datetime(2025, 1, 15, 11, 0)),
    ])
    db.commit()

    by_name = client.get(ENTRIES, params={"name": "ayse"}).json()
    assert by_name["total"] == 2
    assert [Decimal(t["amount"]) for t in by_name["transactions"]] == [Decimal("20"), Decimal("10")]

    by_day = client.get(ENTRIES, params={"start_date": "2025-01-15", "end_date": "2025-01-15"}).json()
    assert by_day["total"] == 2

    by_house = client.get(ENTRIES, params={"house_no": "3"}).json()
    assert [t["customer_name"] for t in by_house["transactions"]] == ["Ali Demir"]


def test_daily_report(client: TestClient, db, customer) -> None:
    db.add_all([
        VerisiyeTransaction(customer_id=customer.id, amount=Decimal("15"), transaction_date=datetime(2025, 1, 15, 0, 0)),
        VerisiyeTransaction(customer_id=customer.id, amount=Decimal("25"), transaction_date=datetime(2025, 1, 15, 23, 59)),
        VerisiyeTransaction(customer_id=customer.id, amount=Decimal("99"), transaction_date=datetime(2025, 1, 16, 0, 0)),
    ])
    db.commit()

    body = client.get("/api/v1/verisiye/reports/daily", params={"date": "2025-01-15"}).json()
    assert body["transaction_count"] == 2
    assert Decimal(body["total_verisiye"]) == Decimal("40")


def test_by_customer_report_keeps_customers_without_entries_in_range(client: TestClient, db, customer) -> None:
    other = Customer(name="Ali Demir", house_no="3", total_credit=Decimal("5"))
    db.add(other)
    db.commit()
    db.add_all([
        VerisiyeTransaction(customer_id=customer.id, amount=Decimal("30"), transaction_date=datetime(2025, 1, 15, 9, 0)),
        VerisiyeTransaction(customer_id=other.id, amount=Decimal("5"), transaction_date=datetime(2025, 1, 1, 9, 0)),
    ])
    db.commit()

    rows = client.get(
        "/api/v1/verisiye/reports/by-customer",
        params={"start_date": "2025-01-10", "end_date": "2025-01-20"},
    ).json()
    assert [(r["name"], r["transaction_count"]) for r in rows] == [("Ayse Yilmaz", 1), ("Ali Demir", 0)]
    assert Decimal(rows[0]["total_verisiye"]) == Decimal("30")
