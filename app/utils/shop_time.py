"""
Shop wall-clock helpers.

Sales timestamps are stored naive, in the shop's local time, so that a
calendar day is simply ``[00:00, next day 00:00)`` of that clock.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from app.core.config import settings


def shop_tz() -> ZoneInfo:
    return ZoneInfo(settings.SHOP_TIMEZONE)


def now_local() -> datetime:
    """Current shop wall-clock time, naive."""
    return datetime.now(shop_tz()).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()


def to_shop_local(value: Optional[datetime]) -> datetime:
    """Normalize an incoming timestamp to naive shop wall-clock time.

    Naive values are taken to already be shop-local; aware values are
    converted. ``None`` means "now".
    """
    if value is None:
        return now_local()
    if value.tzinfo is None:
        return value
    return value.astimezone(shop_tz()).replace(tzinfo=None)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Half-open [start, end) window covering one shop-local calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
