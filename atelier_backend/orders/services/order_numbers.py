# orders/services/order_numbers.py

"""
ORDER NUMBER GENERATOR

Shape: ORD-<unix ms>-<3-digit zero-padded random>
Unique per admin; collisions are retried a bounded number of times.
"""

import logging
import random
import time

from orders.models import Order
from orders.services.exceptions import OrderNumberGenerationError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5


def _now_ms() -> int:
    return int(time.time() * 1000)


def format_order_number(timestamp_ms: int, suffix: int) -> str:
    return f"ORD-{timestamp_ms}-{suffix:03d}"


def generate_order_number(admin_id, *, clock=_now_ms, rng=None) -> str:
    rng = rng or random
    for attempt in range(1, MAX_ATTEMPTS + 1):
        candidate = format_order_number(clock(), rng.randint(0, 999))
        if not Order.objects.filter(admin_id=admin_id, order_number=candidate).exists():
            return candidate
        logger.info(
            "Order number collision",
            extra={"admin_id": str(admin_id), "candidate": candidate, "attempt": attempt},
        )

    raise OrderNumberGenerationError(
        "Could not generate a unique order number",
        details={"attempts": MAX_ATTEMPTS},
    )
