# orders/models/payment.py

import uuid
from decimal import Decimal

from django.db import models


class Payment(models.Model):
    """
    Partial or full settlement applied against an Order.

    RULES:
    - amount > 0 (DB constraint + ledger validation)
    - never updated in place: corrections are delete + recreate
    - cumulative amount per order <= order.price (PaymentLedger)
    """

    INITIAL_DEPOSIT_NOTE = "Initial deposit"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="payments",
    )

    amount = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=Decimal("0.00")),
                name="payment_amount_gt_zero",
            ),
        ]
        indexes = [
            models.Index(fields=["order", "created_at"], name="payment_order_created_idx"),
        ]

    def __str__(self):
        return f"{self.order_id} | {self.amount}"
