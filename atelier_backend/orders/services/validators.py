# orders/services/validators.py

"""
PRICE / DATE / STATUS VALIDATORS

Pure functions. No rounding, no database access.
"""

import re
from datetime import date, datetime, timezone as dt_timezone

from orders.models import Order
from orders.services.exceptions import (
    InvalidDateComponentsError,
    InvalidDateFormatError,
    InvalidOrderStatusError,
)
from orders.services.money import MAX_PRICE, to_decimal

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def validate_price(value) -> bool:
    d = to_decimal(value)
    if d is None:
        return False
    return abs(d) <= MAX_PRICE


def parse_order_date(value):
    """
    Normalize a due date to an aware datetime at 00:00 UTC.

    - None / "" -> None
    - datetime  -> returned unchanged
    - date      -> midnight UTC of that date
    - "YYYY-MM-DD" -> midnight UTC, calendar-checked
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=dt_timezone.utc)

    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise InvalidDateFormatError(value)

    year, month, day = (int(part) for part in value.split("-"))
    try:
        return datetime(year, month, day, tzinfo=dt_timezone.utc)
    except ValueError as exc:
        raise InvalidDateComponentsError(value) from exc


def validate_order_status(value) -> str:
    if value not in Order.STATUSES:
        raise InvalidOrderStatusError(
            f"Invalid status. Must be one of: {', '.join(Order.STATUSES)}",
            details={"validStatuses": list(Order.STATUSES)},
        )
    return value
