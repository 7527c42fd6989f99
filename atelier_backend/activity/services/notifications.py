# activity/services/notifications.py

"""
PER-ADMIN NOTIFICATIONS

- Every read / mutation is scoped to the admin; a notification owned by
  someone else is reported as not found.
- Listing order: priority (URGENT first), then newest first.
- Creation publishes `new_notification` after commit.
"""

import logging
import math
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import Case, IntegerField, Value, When
from django.utils import timezone

from activity.models import Notification
from activity.serializers import NotificationSerializer
from common.cache import to_plain
from common.events import NullEventPublisher, publish_on_commit

logger = logging.getLogger("activity")

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class NotificationNotFoundError(Exception):
    """Raised when the notification is absent or belongs to another admin."""


def _priority_rank():
    return Case(
        *[
            When(priority=value, then=Value(rank))
            for rank, (value, _) in enumerate(Notification.PRIORITY_CHOICES)
        ],
        default=Value(0),
        output_field=IntegerField(),
    )


def _positive_int(value, default, upper=None) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    n = max(1, n)
    return min(upper, n) if upper else n


class NotificationService:
    def __init__(self, publisher=None):
        self.publisher = publisher or NullEventPublisher()

    def create_notification(
        self,
        admin_id,
        type,
        title,
        message,
        *,
        priority=Notification.PRIORITY_MEDIUM,
        entity_id=None,
        entity_type="",
        action_url="",
    ) -> Notification:
        notification = Notification.objects.create(
            admin_id=admin_id,
            type=type,
            priority=priority or Notification.PRIORITY_MEDIUM,
            title=title,
            message=message,
            entity_id=str(entity_id) if entity_id is not None else "",
            entity_type=entity_type or "",
            action_url=action_url or "",
        )

        payload = to_plain(NotificationSerializer(notification).data)
        payload["admin"] = str(admin_id)
        publish_on_commit(self.publisher, "new_notification", payload)
        return notification

    def get_notifications(self, admin_id, page=1, limit=DEFAULT_LIMIT, unread_only=False, type=None) -> dict:
        page = _positive_int(page, 1)
        limit = _positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT)

        qs = Notification.objects.filter(admin_id=admin_id)
        if unread_only:
            qs = qs.filter(is_read=False)
        if type:
            qs = qs.filter(type=type)

        total = qs.count()
        offset = (page - 1) * limit
        rows = list(
            qs.annotate(priority_rank=_priority_rank()).order_by("-priority_rank", "-created_at")[
                offset : offset + limit
            ]
        )

        return {
            "notifications": rows,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": math.ceil(total / limit),
            },
            "unreadCount": self.get_unread_count(admin_id),
        }

    def get_unread_count(self, admin_id) -> int:
        return Notification.objects.filter(admin_id=admin_id, is_read=False).count()

    def _get_owned(self, admin_id, notification_id) -> Notification:
        try:
            return Notification.objects.get(pk=notification_id, admin_id=admin_id)
        except (Notification.DoesNotExist, ValidationError, ValueError) as exc:
            raise NotificationNotFoundError("Notification not found") from exc

    def mark_as_read(self, admin_id, notification_id) -> Notification:
        notification = self._get_owned(admin_id, notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = timezone.now()
            notification.save(update_fields=["is_read", "read_at"])
        return notification

    def mark_all_as_read(self, admin_id) -> int:
        return Notification.objects.filter(admin_id=admin_id, is_read=False).update(
            is_read=True,
            read_at=timezone.now(),
        )

    def delete_notification(self, admin_id, notification_id) -> None:
        self._get_owned(admin_id, notification_id).delete()

    def cleanup_old_notifications(self, admin_id, days_to_keep=30) -> int:
        """Deletes READ notifications older than the cutoff."""
        cutoff = timezone.now() - timedelta(days=days_to_keep)
        deleted, _ = Notification.objects.filter(
            admin_id=admin_id,
            is_read=True,
            created_at__lt=cutoff,
        ).delete()
        return deleted

    # ============================================================
    # BEST-EFFORT HELPERS
    # ============================================================

    def _safe_create(self, admin_id, type, title, message, **options):
        try:
            return self.create_notification(admin_id, type, title, message, **options)
        except DatabaseError:
            logger.exception(
                "Failed to create notification",
                extra={"admin_id": str(admin_id), "type": type},
            )
            return None

    def notify_order_status_change(self, admin_id, order_number, new_status, order_id):
        return self._safe_create(
            admin_id,
            Notification.TYPE_ORDER_STATUS,
            "Order Status Updated",
            f"Order {order_number} status changed to {new_status}",
            priority=Notification.PRIORITY_MEDIUM,
            entity_id=order_id,
            entity_type="Order",
            action_url=f"/orders/{order_id}",
        )

    def notify_payment_received(self, admin_id, order_number, amount, payment_id):
        return self._safe_create(
            admin_id,
            Notification.TYPE_PAYMENT_RECEIVED,
            "Payment Received",
            f"Payment of {amount} received for order {order_number}",
            priority=Notification.PRIORITY_HIGH,
            entity_id=payment_id,
            entity_type="Payment",
            action_url=f"/payments/{payment_id}",
        )
