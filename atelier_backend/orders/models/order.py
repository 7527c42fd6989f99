# orders/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Order(models.Model):
    """
    A billable unit of work for a Client.

    GUARANTEES (enforced by orders.services):
    - order_number is system-generated and unique per admin
    - |price| <= 9,999,999.99
    - sum(payments.amount) <= price
    - price and deposit are frozen while any Payment exists
    - deposit (when set) <= price

    STATUS:
    - No transition table: any known status may be set.
    - PENDING_PAYMENT -> PROCESSING -> COMPLETED is the usual path.
    """

    STATUS_PENDING_PAYMENT = "PENDING_PAYMENT"
    STATUS_PROCESSING = "PROCESSING"
    STATUS_READY_FOR_PICKUP = "READY_FOR_PICKUP"
    STATUS_SHIPPED = "SHIPPED"
    STATUS_DELIVERED = "DELIVERED"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_PENDING_PAYMENT, "Pending payment"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_READY_FOR_PICKUP, "Ready for pickup"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    STATUSES = tuple(value for value, _ in STATUS_CHOICES)

    DEFAULT_CURRENCY = "NGN"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(
        max_length=64,
        editable=False,
        help_text="System-generated, unique per admin (ORD-<ms>-<nnn>)",
    )

    admin = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="orders",
    )
    client = models.ForeignKey(
        "clients.Client",
        on_delete=models.CASCADE,
        related_name="orders",
    )
    project = models.ForeignKey(
        "clients.Project",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    event = models.ForeignKey(
        "clients.Event",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    details = models.JSONField(default=dict, blank=True)

    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default=DEFAULT_CURRENCY)

    due_date = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Calendar due date, stored at 00:00 UTC",
    )

    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING_PAYMENT,
    )

    deposit = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    style_description = models.TextField(null=True, blank=True)

    style_images = models.ManyToManyField(
        "clients.StyleImage",
        through="orders.OrderStyleImage",
        related_name="orders",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["admin", "order_number"],
                name="uniq_admin_order_number",
            ),
        ]
        indexes = [
            models.Index(fields=["admin", "created_at"], name="order_admin_created_idx"),
            models.Index(fields=["client", "created_at"], name="order_client_created_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]

    def __str__(self):
        return f"{self.order_number} | {self.price} {self.currency}"
