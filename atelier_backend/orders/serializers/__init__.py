from .order import (
    OrderCreateInputSerializer,
    OrderDetailsInputSerializer,
    OrderSerializer,
    OrderStatusInputSerializer,
)
from .payment import PaymentInputSerializer, PaymentSerializer

__all__ = [
    "OrderSerializer",
    "OrderCreateInputSerializer",
    "OrderDetailsInputSerializer",
    "OrderStatusInputSerializer",
    "PaymentSerializer",
    "PaymentInputSerializer",
]
