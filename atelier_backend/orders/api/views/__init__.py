from .orders import (
    ClientOrdersView,
    EventOrderCreateView,
    OrderDetailsUpdateView,
    OrderDetailView,
    OrderListView,
    OrderStatusView,
)
from .payments import OrderPaymentsView, PaymentDetailView

__all__ = [
    "ClientOrdersView",
    "EventOrderCreateView",
    "OrderDetailView",
    "OrderDetailsUpdateView",
    "OrderListView",
    "OrderStatusView",
    "OrderPaymentsView",
    "PaymentDetailView",
]
