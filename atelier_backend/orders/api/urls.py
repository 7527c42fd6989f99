# orders/api/urls.py

from django.urls import path

from orders.api.views import (
    ClientOrdersView,
    EventOrderCreateView,
    OrderDetailsUpdateView,
    OrderDetailView,
    OrderListView,
    OrderPaymentsView,
    OrderStatusView,
    PaymentDetailView,
)

urlpatterns = [
    path("clients/<uuid:client_id>/orders/", ClientOrdersView.as_view(), name="client-orders"),
    path("orders/", OrderListView.as_view(), name="order-list"),
    path(
        "orders/event/<uuid:event_id>/client/<uuid:client_id>/",
        EventOrderCreateView.as_view(),
        name="event-order-create",
    ),
    path("orders/<uuid:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("orders/<uuid:order_id>/status/", OrderStatusView.as_view(), name="order-status"),
    path("orders/<uuid:order_id>/details/", OrderDetailsUpdateView.as_view(), name="order-details"),
    path("orders/<uuid:order_id>/payments/", OrderPaymentsView.as_view(), name="order-payments"),
    path("payments/<uuid:payment_id>/", PaymentDetailView.as_view(), name="payment-detail"),
]
