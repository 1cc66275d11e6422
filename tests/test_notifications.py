from decimal import Decimal

import pytest
import requests
from fastapi.testclient import TestClient

from app.core.dependencies import get_notification_gateway
from app.main import app
from app.models import Customer, VerisiyeTransaction
from app.services.notification_gateway import (
    MockNotificationGateway,
    NotificationGateway,
    NotificationResult,
    WhatsAppCloudGateway,
    render_credit_message,
)
from app.services.notification_service import send_bulk_credit_alerts
from app.utils.phone import format_phone_number


class RecordingGateway(NotificationGateway):
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send(self, phone_number, customer_name, amount_owed):
        self.sent.append((phone_number, customer_name, amount_owed))
        if customer_name in self.fail_for:
            raise RuntimeError("provider down")
        return NotificationResult(delivered=True, reference=f"ref-{len(self.sent)}")


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


def add_debtor(db, name, phone, amount):
    person = Customer(name=name, phone=phone, total_credit=Decimal(amount))
    db.add(person)
    db.commit()
    db.add(VerisiyeTransaction(customer_id=person.id, amount=Decimal(amount)))
    db.commit()
    return person.id


# ==================== PHONE / MESSAGE ====================

@pytest.mark.parametrize("raw, expected", [
    ("0555 123 45 67", "+905551234567"),
    ("(0532) 111-22-33", "+905321112233"),
    ("905551234567", "+905551234567"),
    ("", None),
    (None, None),
    ("---", None),
])
def test_format_phone_number(raw, expected) -> None:
    assert format_phone_number(raw) == expected


def test_format_phone_number_custom_country_code() -> None:
    assert format_phone_number("07700 900123", country_code="44") == "+447700900123"


def test_credit_message_mentions_amount_and_shop() -> None:
    message = render_credit_message("Ayse", Decimal("150.50"), "Bakkal")
    assert message.startswith("Merhaba Ayse")
    assert "150.50 TL" in message
    assert message.endswith("Bakkal")


# ==================== GATEWAYS ====================

def test_mock_gateway_reports_delivery() -> None:
    result = MockNotificationGateway(shop_name="Bakkal").send("+905551234567", "Ayse", Decimal("10"))
    assert result.delivered
    assert result.reference.startswith("mock_")


def test_whatsapp_gateway_posts_text_message() -> None:
    session = FakeSession(FakeResponse(payload={"messages": [{"id": "wamid.123"}]}))
    gateway = WhatsAppCloudGateway("token", "555000", api_version="v18.0", shop_name="Bakkal", session=session)

    result = gateway.send("+905551234567", "Ayse", Decimal("42.00"))

    assert result.delivered and result.reference == "wamid.123"
    url, kwargs = session.calls[0]
    assert url == "https://graph.facebook.com/v18.0/555000/messages"
    assert kwargs["headers"]["Authorization"] == "Bearer token"
    assert kwargs["json"]["to"] == "+905551234567"
    assert "42.00 TL" in kwargs["json"]["text"]["body"]


def test_whatsapp_gateway_http_error_is_not_raised() -> None:
    session = FakeSession(FakeResponse(status_code=401))
    result = WhatsAppCloudGateway("token", "555000", session=session).send("+90555", "Ayse", Decimal("1"))
    assert not result.delivered
    assert "401" in result.error


def test_whatsapp_gateway_requires_credentials() -> None:
    with pytest.raises(ValueError):
        WhatsAppCloudGateway("", "")


# ==================== ALERTS ====================

def test_bulk_alerts_continue_after_failure_and_pace_sends(db) -> None:
    add_debtor(db, "Ayse", "05551234567", "100")
    add_debtor(db, "Mehmet", "05321112233", "50")
    add_debtor(db, "Ali", "05441112233", "75")
    gateway = RecordingGateway(fail_for={"Mehmet"})
    pauses = []

    result = send_bulk_credit_alerts(db, gateway, delay_seconds=1.5, sleep=pauses.append)

    assert result["total"] == 3
    assert result["sent"] == 2
    assert [r["success"] for r in result["results"]] == [True, False, True]
    assert result["results"][1]["error"] == "provider down"
    assert pauses == [1.5, 1.5]


def test_bulk_alerts_filter_by_minimum_credit(db) -> None:
    add_debtor(db, "Ayse", "05551234567", "100")
    add_debtor(db, "Mehmet", "05321112233", "50")
    gateway = RecordingGateway()

    result = send_bulk_credit_alerts(db, gateway, min_credit_amount=Decimal("60"), delay_seconds=0)

    assert result["total"] == 1
    assert gateway.sent == [("+905551234567", "Ayse", Decimal("100.00"))]


def test_bulk_alerts_with_no_match(db) -> None:
    result = send_bulk_credit_alerts(db, RecordingGateway(), customer_ids=[404], delay_seconds=0)
    assert result == {"message": "No customers found matching criteria", "sent": 0, "total": 0, "results": []}


def test_send_alert_endpoint(client: TestClient, db) -> None:
    customer_id = add_debtor(db, "Ayse", "0555 123 45 67", "80")
    gateway = RecordingGateway()
    app.dependency_overrides[get_notification_gateway] = lambda: gateway

    resp = client.post(f"/api/v1/verisiye/whatsapp/send/{customer_id}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["customer"]["phone"] == "+905551234567"
    assert Decimal(body["customer"]["amount"]) == Decimal("80")
    assert gateway.sent[0][0] == "+905551234567"


def test_send_alert_errors(client: TestClient, db) -> None:
    person = Customer(name="Telefonsuz", total_credit=0)
    db.add(person)
    db.commit()

    assert client.post("/api/v1/verisiye/whatsapp/send/404").status_code == 404
    resp = client.post(f"/api/v1/verisiye/whatsapp/send/{person.id}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Customer has no phone number"


def test_send_bulk_endpoint_uses_mock_provider(client: TestClient, db) -> None:
    add_debtor(db, "Ayse", "05551234567", "100")

    resp = client.post("/api/v1/verisiye/whatsapp/send-bulk", json={})

    assert resp.status_code == 200
    body = resp.json()
    assert body["sent"] == 1
    assert body["results"][0]["message_id"].startswith("mock_")


# ==================== SERVICE ====================

def test_root_and_health(client: TestClient) -> None:
    assert "Welcome" in client.get("/").json()["message"]
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
