from decimal import Decimal

TWO_PLACES = Decimal("0.01")


def to_money(value) -> Decimal:
    """Decimal rounded to cents; None (e.g. SUM over no rows) becomes 0.00."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(TWO_PLACES)
