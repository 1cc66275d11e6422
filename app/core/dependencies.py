from functools import lru_cache

from app.core.database import SessionLocal
from app.services.notification_gateway import NotificationGateway, build_notification_gateway


def get_db():
    """Dependency to get database session; one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache(maxsize=1)
def _configured_gateway() -> NotificationGateway:
    return build_notification_gateway()


def get_notification_gateway() -> NotificationGateway:
    """
    Dependency returning the configured notification provider.
    Tests swap it through ``app.dependency_overrides``.
    """
    return _configured_gateway()
