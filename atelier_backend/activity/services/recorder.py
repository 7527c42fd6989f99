# activity/services/recorder.py

"""
Bridges order / payment mutations to the activity feed and notifications.

The order services call these hooks after commit. Every hook is
best-effort: tracker and notification helpers log and swallow their own
database failures.
"""

from activity.models import RecentUpdate
from activity.services.notifications import NotificationService
from activity.services.tracker import track_activity


class NullActivityRecorder:
    def order_created(self, order) -> None:
        return None

    def order_status_changed(self, order, previous_status) -> None:
        return None

    def payment_received(self, order, payment) -> None:
        return None


class ActivityRecorder(NullActivityRecorder):
    def __init__(self, notifications: NotificationService):
        self.notifications = notifications

    def order_created(self, order) -> None:
        track_activity(
            order.admin_id,
            RecentUpdate.TYPE_ORDER_CREATED,
            "New Order Created",
            f"Order {order.order_number} created for {order.client.name}",
            order.pk,
            "Order",
        )

    def order_status_changed(self, order, previous_status) -> None:
        track_activity(
            order.admin_id,
            RecentUpdate.TYPE_ORDER_STATUS_CHANGED,
            "Order Status Updated",
            f"Order {order.order_number} status changed from {previous_status} to {order.status}",
            order.pk,
            "Order",
        )
        self.notifications.notify_order_status_change(
            order.admin_id, order.order_number, order.status, order.pk
        )

    def payment_received(self, order, payment) -> None:
        track_activity(
            order.admin_id,
            RecentUpdate.TYPE_PAYMENT_RECEIVED,
            "Payment Received",
            f"Payment of {payment.amount} received for order {order.order_number}",
            payment.pk,
            "Payment",
        )
        self.notifications.notify_payment_received(
            order.admin_id, order.order_number, payment.amount, payment.pk
        )


def build_activity_recorder(publisher=None) -> ActivityRecorder:
    return ActivityRecorder(NotificationService(publisher))
