from datetime import timedelta
from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase
from django.utils import timezone

from activity.models import Notification, RecentUpdate
from activity.services.notifications import NotificationService
from activity.services.recorder import build_activity_recorder
from activity.services.tracker import (
    cleanup_old_updates,
    get_activity_summary,
    get_recent_updates,
    track_activity,
)
from orders.models import Order
from orders.tests.factories import make_admin, make_client, make_services


class ActivityTrackerTests(TestCase):
    def setUp(self):
        self.admin = make_admin()

    def _track(self, type=RecentUpdate.TYPE_ORDER_CREATED, title="t"):
        return track_activity(self.admin.pk, type, title, "d", "entity-1", "Order")

    def test_track_activity(self):
        update = self._track()
        self.assertEqual(update.entity_id, "entity-1")
        self.assertEqual(update.entity_type, "Order")

    def test_recent_updates_newest_first_with_limit(self):
        for i in range(3):
            self._track(title=f"u{i}")

        titles = [u.title for u in get_recent_updates(self.admin.pk, limit=2)]
        self.assertEqual(titles, ["u2", "u1"])

    def test_cleanup_old_updates(self):
        old = self._track(title="old")
        RecentUpdate.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=40))
        self._track(title="fresh")

        self.assertEqual(cleanup_old_updates(self.admin.pk, days_to_keep=30), 1)
        self.assertEqual(list(RecentUpdate.objects.values_list("title", flat=True)), ["fresh"])

    def test_activity_summary(self):
        self._track()
        self._track()
        self._track(type=RecentUpdate.TYPE_PAYMENT_RECEIVED)
        make_client(self.admin)

        summary = get_activity_summary(self.admin.pk, days=7)
        today = timezone.now().date().isoformat()

        self.assertEqual(summary["totalActivities"], 3)
        self.assertEqual(summary["totalClients"], 1)
        self.assertEqual(summary["totalOrders"], 0)
        self.assertEqual(summary["byType"], {"ORDER_CREATED": 2, "PAYMENT_RECEIVED": 1})
        self.assertEqual(summary["byDay"], {today: 3})
        self.assertEqual(summary["mostActiveDay"], {"date": today, "count": 3})
        self.assertEqual(summary["averagePerDay"], 0.4)

    def test_empty_summary(self):
        summary = get_activity_summary(self.admin.pk)
        self.assertIsNone(summary["mostActiveDay"])
        self.assertEqual(summary["averagePerDay"], 0.0)


class ActivityRecorderTests(TestCase):
    """Order mutations feed the activity log and notifications after commit."""

    def setUp(self):
        self.admin = make_admin()
        self.client_obj = make_client(self.admin, name="Ada Obi")
        self.service, self.ledger, _, self.publisher = make_services(
            activity=build_activity_recorder()
        )

    def test_order_lifecycle_is_recorded(self):
        with self.captureOnCommitCallbacks(execute=True):
            order = self.service.create_order(self.admin.pk, self.client_obj.pk, price="1000")

        update = RecentUpdate.objects.get(type=RecentUpdate.TYPE_ORDER_CREATED)
        self.assertIn(order.order_number, update.description)
        self.assertIn("Ada Obi", update.description)

        with self.captureOnCommitCallbacks(execute=True):
            self.service.update_status(order.pk, Order.STATUS_SHIPPED, self.admin.pk)

        self.assertTrue(
            RecentUpdate.objects.filter(type=RecentUpdate.TYPE_ORDER_STATUS_CHANGED).exists()
        )
        notification = Notification.objects.get(type=Notification.TYPE_ORDER_STATUS)
        self.assertEqual(
            notification.message, f"Order {order.order_number} status changed to SHIPPED"
        )

        with self.captureOnCommitCallbacks(execute=True):
            self.ledger.add_payment(order.pk, self.admin.pk, "600")

        notification = Notification.objects.get(type=Notification.TYPE_PAYMENT_RECEIVED)
        self.assertEqual(
            notification.message, f"Payment of 600.00 received for order {order.order_number}"
        )
        self.assertTrue(
            RecentUpdate.objects.filter(type=RecentUpdate.TYPE_PAYMENT_RECEIVED).exists()
        )

    def test_unchanged_status_records_nothing(self):
        order = self.service.create_order(self.admin.pk, self.client_obj.pk, price="10")

        with self.captureOnCommitCallbacks(execute=True):
            self.service.update_status(order.pk, order.status, self.admin.pk)

        self.assertFalse(Notification.objects.exists())


class CleanupActivityCommandTests(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.other_admin = make_admin("rival@example.com")
        self.notifications = NotificationService()
        self.long_ago = timezone.now() - timedelta(days=40)

    def _old_update(self, admin, title):
        update = track_activity(admin.pk, RecentUpdate.TYPE_ORDER_CREATED, title, "d", "e", "Order")
        RecentUpdate.objects.filter(pk=update.pk).update(created_at=self.long_ago)

    def _old_notification(self, admin, title, *, read):
        notification = self.notifications.create_notification(
            admin.pk, Notification.TYPE_REMINDER, title, "m"
        )
        Notification.objects.filter(pk=notification.pk).update(
            created_at=self.long_ago, is_read=read
        )

    def test_removes_old_rows_for_every_designer(self):
        self._old_update(self.admin, "old-a")
        self._old_update(self.other_admin, "old-b")
        track_activity(self.admin.pk, RecentUpdate.TYPE_ORDER_CREATED, "fresh", "d", "e", "Order")
        self._old_notification(self.admin, "read", read=True)
        self._old_notification(self.admin, "unread", read=False)

        out = StringIO()
        call_command("cleanup_activity", "--days", "30", stdout=out)

        self.assertEqual(list(RecentUpdate.objects.values_list("title", flat=True)), ["fresh"])
        self.assertEqual(list(Notification.objects.values_list("title", flat=True)), ["unread"])
        self.assertIn("Removed 2 updates and 1 notifications", out.getvalue())

    def test_email_limits_cleanup_to_one_designer(self):
        self._old_update(self.admin, "old-a")
        self._old_update(self.other_admin, "old-b")

        call_command("cleanup_activity", "--email", self.other_admin.email, stdout=StringIO())

        self.assertEqual(list(RecentUpdate.objects.values_list("title", flat=True)), ["old-a"])

    def test_unknown_email_is_an_error(self):
        with self.assertRaises(CommandError):
            call_command("cleanup_activity", "--email", "nobody@example.com", stdout=StringIO())
