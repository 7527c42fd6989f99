# activity/models/notification.py

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Notification(models.Model):
    TYPE_ORDER_STATUS = "ORDER_STATUS"
    TYPE_PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    TYPE_CLIENT_ADDED = "CLIENT_ADDED"
    TYPE_PROJECT_UPDATE = "PROJECT_UPDATE"
    TYPE_SYSTEM_ALERT = "SYSTEM_ALERT"
    TYPE_REMINDER = "REMINDER"

    TYPE_CHOICES = [
        (TYPE_ORDER_STATUS, "Order status"),
        (TYPE_PAYMENT_RECEIVED, "Payment received"),
        (TYPE_CLIENT_ADDED, "Client added"),
        (TYPE_PROJECT_UPDATE, "Project update"),
        (TYPE_SYSTEM_ALERT, "System alert"),
        (TYPE_REMINDER, "Reminder"),
    ]

    PRIORITY_LOW = "LOW"
    PRIORITY_MEDIUM = "MEDIUM"
    PRIORITY_HIGH = "HIGH"
    PRIORITY_URGENT = "URGENT"

    # Ascending urgency; listings sort by this rank descending
    PRIORITY_CHOICES = [
        (PRIORITY_LOW, "Low"),
        (PRIORITY_MEDIUM, "Medium"),
        (PRIORITY_HIGH, "High"),
        (PRIORITY_URGENT, "Urgent"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    admin = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="notifications",
    )

    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    priority = models.CharField(max_length=16, choices=PRIORITY_CHOICES, default=PRIORITY_MEDIUM)

    title = models.CharField(max_length=255)
    message = models.TextField()

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)

    entity_id = models.CharField(max_length=64, blank=True, default="")
    entity_type = models.CharField(max_length=32, blank=True, default="")
    action_url = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["admin", "is_read"], name="notif_admin_read_idx"),
            models.Index(fields=["admin", "created_at"], name="notif_admin_created_idx"),
        ]

    def __str__(self):
        return f"{self.priority} | {self.title}"
