"""
Customer notification delivery.

Services depend on ``NotificationGateway`` only; the concrete provider is
picked from settings by ``build_notification_gateway``.
"""

import abc
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import requests

from app.core.config import settings
from app.logger_config import logger


@dataclass
class NotificationResult:
    delivered: bool
    reference: Optional[str] = None
    error: Optional[str] = None


def render_credit_message(customer_name: str, amount_owed: Decimal, shop_name: Optional[str] = None) -> str:
    return (
        f"Merhaba {customer_name},\n\n"
        f"Verisiye borcunuz: {amount_owed} TL\n\n"
        f"Lütfen en kısa sürede ödeme yapınız.\n\n"
        f"Teşekkürler,\n{shop_name or settings.SHOP_NAME}"
    )


class NotificationGateway(abc.ABC):
    """Delivers a credit reminder to one phone number (international format)."""

    @abc.abstractmethod
    def send(self, phone_number: str, customer_name: str, amount_owed: Decimal) -> NotificationResult:
        raise NotImplementedError


class MockNotificationGateway(NotificationGateway):
    """Logs the message instead of sending it."""

    def __init__(self, shop_name: Optional[str] = None):
        self.shop_name = shop_name or settings.SHOP_NAME

    def send(self, phone_number: str, customer_name: str, amount_owed: Decimal) -> NotificationResult:
        message = render_credit_message(customer_name, amount_owed, self.shop_name)
        logger.info(f"MOCK WhatsApp alert to {phone_number} ({customer_name}), amount {amount_owed} TL:\n{message}")
        return NotificationResult(delivered=True, reference=f"mock_{int(time.time() * 1000)}")


class WhatsAppCloudGateway(NotificationGateway):
    """WhatsApp Cloud API (Meta Graph) text message sender."""

    BASE_URL = "https://graph.facebook.com"

    def __init__(
        self,
        api_token: str,
        phone_number_id: str,
        api_version: str = "v18.0",
        timeout: float = 10.0,
        shop_name: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        if not api_token or not phone_number_id:
            raise ValueError("WhatsApp Cloud gateway needs WHATSAPP_API_TOKEN and WHATSAPP_PHONE_NUMBER_ID")
        self.api_token = api_token
        self.phone_number_id = phone_number_id
        self.api_version = api_version
        self.timeout = timeout
        self.shop_name = shop_name or settings.SHOP_NAME
        self.session = session or requests.Session()

    @property
    def messages_url(self) -> str:
        return f"{self.BASE_URL}/{self.api_version}/{self.phone_number_id}/messages"

    def send(self, phone_number: str, customer_name: str, amount_owed: Decimal) -> NotificationResult:
        payload = {
            "messaging_product": "whatsapp",
            "to": phone_number,
            "type": "text",
            "text": {"body": render_credit_message(customer_name, amount_owed, self.shop_name)},
        }
        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }
        try:
            response = self.session.post(self.messages_url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            message_id = response.json()["messages"][0]["id"]
        except (requests.RequestException, ValueError, KeyError, IndexError) as e:
            logger.error(f"Error sending WhatsApp message to {phone_number}: {str(e)}")
            return NotificationResult(delivered=False, error=str(e))

        logger.info(f"WhatsApp message sent to {phone_number}: {message_id}")
        return NotificationResult(delivered=True, reference=message_id)


def build_notification_gateway() -> NotificationGateway:
    provider = settings.NOTIFICATION_PROVIDER.lower()
    if provider == "whatsapp_cloud":
        return WhatsAppCloudGateway(
            api_token=settings.WHATSAPP_API_TOKEN,
            phone_number_id=settings.WHATSAPP_PHONE_NUMBER_ID,
            api_version=settings.WHATSAPP_API_VERSION,
            timeout=settings.WHATSAPP_TIMEOUT_SECONDS,
        )
    if provider == "mock":
        return MockNotificationGateway()
    raise ValueError(f"Unknown NOTIFICATION_PROVIDER '{settings.NOTIFICATION_PROVIDER}'")
