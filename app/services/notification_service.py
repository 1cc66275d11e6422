import time
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.common.exceptions import ValidationError
from app.logger_config import logger
from app.services.customer_service import get_customer_with_stats, get_customers_for_alerts
from app.services.notification_gateway import NotificationGateway
from app.utils.money import to_money
from app.utils.phone import format_phone_number


def send_credit_alert(db: Session, gateway: NotificationGateway, customer_id: int) -> dict:
    """Send one customer their outstanding verisiye total."""
    customer = get_customer_with_stats(db, customer_id)
    if not customer["phone"]:
        raise ValidationError("Customer has no phone number")

    phone = format_phone_number(customer["phone"])
    amount = customer["total_credit_given"]
    result = gateway.send(phone, customer["name"], amount)

    return {
        "success": result.delivered,
        "message_id": result.reference,
        "error": result.error,
        "customer": {
            "id": customer["id"],
            "name": customer["name"],
            "phone": phone,
            "amount": amount,
        },
    }


def send_bulk_credit_alerts(
    db: Session,
    gateway: NotificationGateway,
    customer_ids: Optional[List[int]] = None,
    min_credit_amount: Optional[Decimal] = None,
    delay_seconds: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> dict:
    """
    Alert every matching customer that has a phone number.

    Sends are spaced ``delay_seconds`` apart for the provider's rate limit.
    A failed send never stops the batch; each customer gets its own result.
    """
    recipients = get_customers_for_alerts(db, customer_ids=customer_ids, min_credit_amount=min_credit_amount)
    if not recipients:
        return {"message": "No customers found matching criteria", "sent": 0, "total": 0, "results": []}

    results = []
    for index, (customer, total_credit) in enumerate(recipients):
        if index and delay_seconds > 0:
            sleep(delay_seconds)

        phone = format_phone_number(customer.phone)
        amount = to_money(total_credit)
        if not phone:
            results.append({
                "customer_id": customer.id,
                "customer_name": customer.name,
                "success": False,
                "message_id": None,
                "error": "Customer has no phone number",
            })
            continue

        try:
            result = gateway.send(phone, customer.name, amount)
        except Exception as e:
            logger.exception(f"Notification gateway failed for customer {customer.id}")
            results.append({
                "customer_id": customer.id,
                "customer_name": customer.name,
                "success": False,
                "message_id": None,
                "error": str(e),
            })
            continue

        results.append({
            "customer_id": customer.id,
            "customer_name": customer.name,
            "success": result.delivered,
            "message_id": result.reference,
            "error": result.error,
        })

    sent = sum(1 for r in results if r["success"])
    logger.info(f"Bulk credit alerts: sent {sent} out of {len(results)}")
    return {
        "message": f"Sent {sent} out of {len(results)} WhatsApp alerts",
        "sent": sent,
        "total": len(results),
        "results": results,
    }
