# orders/services/money.py

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

# Largest absolute price the ledger accepts
MAX_PRICE = Decimal("9999999.99")


def to_decimal(v) -> Decimal | None:
    """
    Parse int / float / Decimal / numeric string.

    Returns None when the value cannot be parsed or is not finite.
    Booleans are rejected even though they are ints.
    """
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
    try:
        d = Decimal(str(v))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not d.is_finite():
        return None
    return d


def _money(v) -> Decimal:
    """Quantize to 2dp, half away from zero (negatives included)."""
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
