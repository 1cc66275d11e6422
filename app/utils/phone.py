import re
from typing import Optional

from app.core.config import settings

_NON_DIGITS = re.compile(r"\D")


def format_phone_number(phone: Optional[str], country_code: Optional[str] = None) -> Optional[str]:
    """
    Convert a local phone number to international format, e.g.
    "0555 123 45 67" -> "+905551234567".

    Non-digits are stripped, a leading 0 is replaced by the country calling
    code and "+" is prepended.
    """
    if not phone:
        return None

    cleaned = _NON_DIGITS.sub("", phone)
    if not cleaned:
        return None

    if cleaned.startswith("0"):
        cleaned = (country_code or settings.COUNTRY_CALLING_CODE) + cleaned[1:]

    return f"+{cleaned}"
