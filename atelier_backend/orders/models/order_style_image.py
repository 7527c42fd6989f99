# orders/models/order_style_image.py

import uuid

from django.db import models


class OrderStyleImage(models.Model):
    """Join row: Order <-> StyleImage (replaced wholesale on update)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="style_image_links",
    )
    style_image = models.ForeignKey(
        "clients.StyleImage",
        on_delete=models.CASCADE,
        related_name="order_links",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "style_image"],
                name="uniq_order_style_image",
            ),
        ]

    def __str__(self):
        return f"{self.order_id} <- {self.style_image_id}"
