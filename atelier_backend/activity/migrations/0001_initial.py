"""
======================================================
PATH: activity/migrations/0001_initial.py
======================================================
MIGRATION: CREATE RecentUpdate, Notification
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="RecentUpdate",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("CLIENT_CREATED", "Client created"),
                            ("ORDER_CREATED", "Order created"),
                            ("ORDER_STATUS_CHANGED", "Order status changed"),
                            ("PROJECT_CREATED", "Project created"),
                            ("PROJECT_STATUS_CHANGED", "Project status changed"),
                            ("PAYMENT_RECEIVED", "Payment received"),
                            ("EVENT_CREATED", "Event created"),
                            ("MEASUREMENT_ADDED", "Measurement added"),
                        ],
                        max_length=32,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("entity_id", models.CharField(blank=True, default="", max_length=64)),
                ("entity_type", models.CharField(blank=True, default="", max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "admin",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="recent_updates",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["admin", "created_at"], name="update_admin_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("ORDER_STATUS", "Order status"),
                            ("PAYMENT_RECEIVED", "Payment received"),
                            ("CLIENT_ADDED", "Client added"),
                            ("PROJECT_UPDATE", "Project update"),
                            ("SYSTEM_ALERT", "System alert"),
                            ("REMINDER", "Reminder"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "priority",
                    models.CharField(
                        choices=[
                            ("LOW", "Low"),
                            ("MEDIUM", "Medium"),
                            ("HIGH", "High"),
                            ("URGENT", "Urgent"),
                        ],
                        default="MEDIUM",
                        max_length=16,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField()),
                ("is_read", models.BooleanField(default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("entity_id", models.CharField(blank=True, default="", max_length=64)),
                ("entity_type", models.CharField(blank=True, default="", max_length=32)),
                ("action_url", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "admin",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["admin", "is_read"], name="notif_admin_read_idx"),
                    models.Index(fields=["admin", "created_at"], name="notif_admin_created_idx"),
                ],
            },
        ),
    ]
