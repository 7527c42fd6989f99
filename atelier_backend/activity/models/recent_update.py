# activity/models/recent_update.py

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class RecentUpdate(models.Model):
    """
    One row of an admin's activity feed.

    Append-only; old rows are pruned by cleanup_old_updates().
    """

    TYPE_CLIENT_CREATED = "CLIENT_CREATED"
    TYPE_ORDER_CREATED = "ORDER_CREATED"
    TYPE_ORDER_STATUS_CHANGED = "ORDER_STATUS_CHANGED"
    TYPE_PROJECT_CREATED = "PROJECT_CREATED"
    TYPE_PROJECT_STATUS_CHANGED = "PROJECT_STATUS_CHANGED"
    TYPE_PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    TYPE_EVENT_CREATED = "EVENT_CREATED"
    TYPE_MEASUREMENT_ADDED = "MEASUREMENT_ADDED"

    TYPE_CHOICES = [
        (TYPE_CLIENT_CREATED, "Client created"),
        (TYPE_ORDER_CREATED, "Order created"),
        (TYPE_ORDER_STATUS_CHANGED, "Order status changed"),
        (TYPE_PROJECT_CREATED, "Project created"),
        (TYPE_PROJECT_STATUS_CHANGED, "Project status changed"),
        (TYPE_PAYMENT_RECEIVED, "Payment received"),
        (TYPE_EVENT_CREATED, "Event created"),
        (TYPE_MEASUREMENT_ADDED, "Measurement added"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    admin = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="recent_updates",
    )

    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    entity_id = models.CharField(max_length=64, blank=True, default="")
    entity_type = models.CharField(max_length=32, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["admin", "created_at"], name="update_admin_created_idx"),
        ]

    def __str__(self):
        return f"{self.type} | {self.title}"
