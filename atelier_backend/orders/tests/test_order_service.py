from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase

from orders.models import Order, OrderStyleImage, Payment
from orders.services.cache_keys import admin_orders_key, client_orders_key, order_key
from orders.services.exceptions import (
    ClientNotFoundError,
    ClientNotInEventError,
    EventNotFoundError,
    ForbiddenError,
    InvalidDepositError,
    InvalidDueDateError,
    InvalidOrderStatusError,
    InvalidPriceError,
    OrderNotFoundError,
    OrderValidationError,
    PaymentLockedError,
    ProjectNotFoundError,
    UnauthorizedError,
)
from orders.tests.factories import (
    make_admin,
    make_client,
    make_event,
    make_project,
    make_services,
    make_style_image,
)


class OrderCreateTests(TestCase):
    """
    GUARANTEES:
    - order + initial deposit payment commit together
    - related entities must belong to the acting admin
    - nothing is persisted when a check fails
    """

    def setUp(self):
        self.admin = make_admin()
        self.other_admin = make_admin("rival@example.com")
        self.client_obj = make_client(self.admin)
        self.service, self.ledger, self.cache, self.publisher = make_services()

    def test_defaults(self):
        order = self.service.create_order(self.admin.pk, self.client_obj.pk, price="1500")

        self.assertEqual(order.status, Order.STATUS_PENDING_PAYMENT)
        self.assertEqual(order.currency, "NGN")
        self.assertEqual(order.price, Decimal("1500.00"))
        self.assertTrue(order.order_number.startswith("ORD-"))
        self.assertEqual(order.payments.count(), 0)

    def test_missing_admin_is_unauthorized(self):
        with self.assertRaises(UnauthorizedError):
            self.service.create_order(None, self.client_obj.pk, price="10")

    def test_invalid_price(self):
        with self.assertRaises(InvalidPriceError):
            self.service.create_order(self.admin.pk, self.client_obj.pk, price="10000000.00")
        self.assertEqual(Order.objects.count(), 0)

    def test_price_is_rounded_half_up_on_storage(self):
        order = self.service.create_order(self.admin.pk, self.client_obj.pk, price="10.005")
        self.assertEqual(order.price, Decimal("10.01"))

    def test_invalid_due_date_wraps_date_error(self):
        with self.assertRaises(InvalidDueDateError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="10", due_date="2025-02-30"
            )

    def test_due_date_stored_at_midnight_utc(self):
        order = self.service.create_order(
            self.admin.pk, self.client_obj.pk, price="10", due_date="2025-06-01"
        )
        self.assertEqual(order.due_date, datetime(2025, 6, 1, tzinfo=dt_timezone.utc))

    def test_unknown_client(self):
        other_client = make_client(self.other_admin)
        other_client_id = other_client.pk
        other_client.delete()

        with self.assertRaises(ClientNotFoundError):
            self.service.create_order(self.admin.pk, other_client_id, price="10")

    def test_foreign_client_is_forbidden(self):
        foreign = make_client(self.other_admin)
        with self.assertRaises(ForbiddenError):
            self.service.create_order(self.admin.pk, foreign.pk, price="10")

    def test_deposit_creates_initial_payment(self):
        """
        Business rule:
        deposit D > 0 => exactly one Payment of D with note "Initial deposit"
        and remainingBalance = price - D
        """
        order = self.service.create_order(
            self.admin.pk, self.client_obj.pk, price="1000.00", deposit="250"
        )

        payments = list(Payment.objects.filter(order=order))
        self.assertEqual(len(payments), 1)
        self.assertEqual(payments[0].amount, Decimal("250.00"))
        self.assertEqual(payments[0].notes, "Initial deposit")
        self.assertEqual(order.deposit, Decimal("250.00"))

        summary = self.ledger.summarize(order)
        self.assertEqual(summary["remainingBalance"], Decimal("750.00"))
        self.assertFalse(summary["isFullyPaid"])

    def test_zero_deposit_creates_no_payment(self):
        order = self.service.create_order(
            self.admin.pk, self.client_obj.pk, price="100", deposit="0"
        )
        self.assertEqual(order.payments.count(), 0)

    def test_deposit_above_price_is_rejected(self):
        with self.assertRaises(InvalidDepositError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="100", deposit="100.01"
            )
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(Payment.objects.count(), 0)

    def test_negative_deposit_is_rejected(self):
        with self.assertRaises(InvalidDepositError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="100", deposit="-5"
            )

    def test_huge_deposit_is_rejected(self):
        with self.assertRaises(InvalidDepositError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="1000.00", deposit="1e30"
            )
        self.assertEqual(Order.objects.count(), 0)

    def test_invalid_status(self):
        with self.assertRaises(InvalidOrderStatusError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="100", status="LOST"
            )

    # =====================================================
    # EVENT / PROJECT LINKAGE
    # =====================================================

    def test_client_not_in_event_persists_nothing(self):
        event = make_event(self.admin)

        with self.assertRaises(ClientNotInEventError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="100", event_id=event.pk
            )
        self.assertEqual(Order.objects.count(), 0)

    def test_event_participant_can_order(self):
        event = make_event(self.admin, self.client_obj)
        order = self.service.create_order(
            self.admin.pk, self.client_obj.pk, price="100", event_id=event.pk
        )
        self.assertEqual(order.event_id, event.pk)

    def test_foreign_event_is_forbidden(self):
        foreign_event = make_event(self.other_admin)
        with self.assertRaises(ForbiddenError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="100", event_id=foreign_event.pk
            )

    def test_create_for_event_requires_event(self):
        with self.assertRaises(OrderValidationError):
            self.service.create_order_for_event(self.admin.pk, "", self.client_obj.pk, price="1")

    def test_create_for_event_unknown_event(self):
        with self.assertRaises(EventNotFoundError):
            self.service.create_order_for_event(
                self.admin.pk,
                "00000000-0000-0000-0000-000000000000",
                self.client_obj.pk,
                price="1",
            )

    def test_project_must_belong_to_client(self):
        other_client = make_client(self.admin, name="Bola")
        project = make_project(self.admin, other_client)

        with self.assertRaises(ForbiddenError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="100", project_id=project.pk
            )

    def test_unknown_project(self):
        with self.assertRaises(ProjectNotFoundError):
            self.service.create_order(
                self.admin.pk, self.client_obj.pk, price="100", project_id="not-a-uuid"
            )

    def test_style_images_are_linked(self):
        first = make_style_image(self.admin)
        second = make_style_image(self.admin)

        order = self.service.create_order(
            self.admin.pk,
            self.client_obj.pk,
            price="100",
            style_image_ids=[first.pk, second.pk],
        )
        self.assertEqual(
            set(order.style_images.values_list("pk", flat=True)), {first.pk, second.pk}
        )

    # =====================================================
    # SIDE EFFECTS
    # =====================================================

    def test_created_event_and_list_invalidation_run_after_commit(self):
        list_key = admin_orders_key(self.admin.pk, 1, 10)
        client_key = client_orders_key(self.client_obj.pk, 1, 10)
        self.cache.set(list_key, {"stale": True}, 300)
        self.cache.set(client_key, {"stale": True}, 300)

        with self.captureOnCommitCallbacks(execute=True):
            order = self.service.create_order(self.admin.pk, self.client_obj.pk, price="100")
            self.assertEqual(self.publisher.names(), [])

        self.assertEqual(self.publisher.names(), ["order_created"])
        _, payload = self.publisher.events[0]
        self.assertEqual(payload["id"], str(order.pk))
        self.assertIsNone(self.cache.get(list_key))
        self.assertIsNone(self.cache.get(client_key))


class OrderReadTests(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.other_admin = make_admin("rival@example.com")
        self.client_obj = make_client(self.admin)
        self.service, self.ledger, self.cache, self.publisher = make_services()

    def _order(self, price="100"):
        return self.service.create_order(self.admin.pk, self.client_obj.pk, price=price)

    def test_get_order_twice_returns_identical_data(self):
        order = self._order()

        first = self.service.get_order(order.pk, self.admin.pk)
        with self.assertNumQueries(0):
            second = self.service.get_order(order.pk, self.admin.pk)

        self.assertEqual(first, second)
        self.assertEqual(first["price"], "100.00")
        self.assertEqual(self.cache.get(order_key(order.pk)), first)

    def test_get_order_not_found(self):
        with self.assertRaises(OrderNotFoundError):
            self.service.get_order("00000000-0000-0000-0000-000000000000", self.admin.pk)

    def test_get_order_of_other_admin_is_forbidden_even_when_cached(self):
        order = self._order()
        self.service.get_order(order.pk, self.admin.pk)

        with self.assertRaises(ForbiddenError):
            self.service.get_order(order.pk, self.other_admin.pk)

    def test_list_orders_pagination(self):
        for _ in range(3):
            self._order()

        result = self.service.list_orders(self.admin.pk, page=2, page_size=2)

        self.assertEqual(len(result["data"]), 1)
        self.assertEqual(
            result["pagination"],
            {"page": 2, "pageSize": 2, "total": 3, "totalPages": 2},
        )

    def test_list_orders_clamps_page_size(self):
        result = self.service.list_orders(self.admin.pk, page=0, page_size=500)
        self.assertEqual(result["pagination"]["page"], 1)
        self.assertEqual(result["pagination"]["pageSize"], 100)
        self.assertEqual(result["pagination"]["totalPages"], 0)

    def test_list_orders_only_own(self):
        self._order()
        foreign_client = make_client(self.other_admin)
        self.service.create_order(self.other_admin.pk, foreign_client.pk, price="5")

        result = self.service.list_orders(self.admin.pk)
        self.assertEqual(result["pagination"]["total"], 1)

    def test_list_client_orders_checks_ownership(self):
        foreign_client = make_client(self.other_admin)
        with self.assertRaises(ForbiddenError):
            self.service.list_client_orders(foreign_client.pk, self.admin.pk)

    def test_list_client_orders(self):
        self._order()
        other = make_client(self.admin, name="Bola")
        self.service.create_order(self.admin.pk, other.pk, price="5")

        result = self.service.list_client_orders(self.client_obj.pk, self.admin.pk)
        self.assertEqual(result["pagination"]["total"], 1)
        self.assertEqual(result["data"][0]["client"]["id"], str(self.client_obj.pk))


class OrderUpdateTests(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.other_admin = make_admin("rival@example.com")
        self.client_obj = make_client(self.admin)
        self.service, self.ledger, self.cache, self.publisher = make_services()
        self.order = self.service.create_order(self.admin.pk, self.client_obj.pk, price="1000")

    # =====================================================
    # STATUS
    # =====================================================

    def test_any_known_status_may_be_set(self):
        order = self.service.update_status(self.order.pk, Order.STATUS_DELIVERED, self.admin.pk)
        self.assertEqual(order.status, Order.STATUS_DELIVERED)

        order = self.service.update_status(self.order.pk, Order.STATUS_PENDING_PAYMENT, self.admin.pk)
        self.assertEqual(order.status, Order.STATUS_PENDING_PAYMENT)

    def test_unknown_status_is_rejected(self):
        with self.assertRaises(InvalidOrderStatusError):
            self.service.update_status(self.order.pk, "LOST", self.admin.pk)

    def test_status_update_by_other_admin_is_forbidden(self):
        with self.assertRaises(ForbiddenError):
            self.service.update_status(self.order.pk, Order.STATUS_SHIPPED, self.other_admin.pk)

    def test_status_update_invalidates_single_order_cache(self):
        self.service.get_order(self.order.pk, self.admin.pk)

        with self.captureOnCommitCallbacks(execute=True):
            self.service.update_status(self.order.pk, Order.STATUS_SHIPPED, self.admin.pk)

        self.assertIsNone(self.cache.get(order_key(self.order.pk)))
        self.assertEqual(
            self.service.get_order(self.order.pk, self.admin.pk)["status"],
            Order.STATUS_SHIPPED,
        )
        self.assertEqual(self.publisher.names(), ["order_updated"])

    # =====================================================
    # DETAILS
    # =====================================================

    def test_only_present_keys_are_touched(self):
        self.service.update_details(
            self.order.pk, self.admin.pk, style_description="Mermaid cut"
        )
        order = self.service.update_details(self.order.pk, self.admin.pk, details={"bust": 34})

        self.assertEqual(order.style_description, "Mermaid cut")
        self.assertEqual(order.details, {"bust": 34})
        self.assertEqual(order.price, Decimal("1000.00"))

    def test_unknown_field_is_rejected(self):
        with self.assertRaises(OrderValidationError):
            self.service.update_details(self.order.pk, self.admin.pk, status="SHIPPED")

    def test_price_change_without_payments(self):
        order = self.service.update_details(self.order.pk, self.admin.pk, price="1200")
        self.assertEqual(order.price, Decimal("1200.00"))

    def test_price_is_locked_after_payment(self):
        """
        Business rule:
        any payment => price / deposit immutable
        """
        self.ledger.add_payment(self.order.pk, self.admin.pk, "100")

        with self.assertRaises(PaymentLockedError):
            self.service.update_details(self.order.pk, self.admin.pk, price="1200")

        with self.assertRaises(PaymentLockedError):
            self.service.update_details(self.order.pk, self.admin.pk, deposit="50")

    def test_zero_and_missing_deposit_are_the_same_after_payment(self):
        self.ledger.add_payment(self.order.pk, self.admin.pk, "100")

        order = self.service.update_details(
            self.order.pk, self.admin.pk, price="1000.00", deposit=0
        )
        self.assertEqual(order.deposit, Decimal("0.00"))

    def test_missing_deposit_matches_stored_zero_after_payment(self):
        order = self.service.create_order(
            self.admin.pk, self.client_obj.pk, price="500", deposit="0"
        )
        self.assertEqual(order.deposit, Decimal("0.00"))
        self.ledger.add_payment(order.pk, self.admin.pk, "50")

        order = self.service.update_details(order.pk, self.admin.pk, deposit=None)
        self.assertIsNone(order.deposit)

    def test_huge_deposit_update_is_rejected(self):
        with self.assertRaises(InvalidDepositError):
            self.service.update_details(self.order.pk, self.admin.pk, deposit="1e30")

    def test_same_price_is_allowed_after_payment(self):
        self.ledger.add_payment(self.order.pk, self.admin.pk, "100")
        order = self.service.update_details(
            self.order.pk, self.admin.pk, price="1000", style_description="ok"
        )
        self.assertEqual(order.style_description, "ok")

    def test_deleting_only_payment_lifts_the_lock(self):
        result = self.ledger.add_payment(self.order.pk, self.admin.pk, "1000")
        self.ledger.delete_payment(result["payment"].pk, self.admin.pk)

        order = self.service.update_details(self.order.pk, self.admin.pk, price="1500")
        self.assertEqual(order.price, Decimal("1500.00"))

    def test_price_below_existing_deposit_is_rejected(self):
        self.service.update_details(self.order.pk, self.admin.pk, deposit="500")
        with self.assertRaises(InvalidDepositError):
            self.service.update_details(self.order.pk, self.admin.pk, price="400")

    def test_project_link_and_clear(self):
        project = make_project(self.admin, self.client_obj)

        order = self.service.update_details(self.order.pk, self.admin.pk, project_id=project.pk)
        self.assertEqual(order.project_id, project.pk)

        order = self.service.update_details(self.order.pk, self.admin.pk, project_id="")
        self.assertIsNone(order.project_id)

    def test_event_change_requires_participation(self):
        event = make_event(self.admin)
        with self.assertRaises(ClientNotInEventError):
            self.service.update_details(self.order.pk, self.admin.pk, event_id=event.pk)

    def test_style_images_are_replaced(self):
        first = make_style_image(self.admin)
        second = make_style_image(self.admin)

        self.service.update_details(self.order.pk, self.admin.pk, style_image_ids=[first.pk])
        self.service.update_details(self.order.pk, self.admin.pk, style_image_ids=[second.pk])

        linked = OrderStyleImage.objects.filter(order=self.order)
        self.assertEqual([link.style_image_id for link in linked], [second.pk])

    def test_due_date_can_be_cleared(self):
        self.service.update_details(self.order.pk, self.admin.pk, due_date="2025-01-31")
        order = self.service.update_details(self.order.pk, self.admin.pk, due_date=None)
        self.assertIsNone(order.due_date)

    # =====================================================
    # DELETE
    # =====================================================

    def test_delete_cascades_payments(self):
        self.ledger.add_payment(self.order.pk, self.admin.pk, "100")

        with self.captureOnCommitCallbacks(execute=True):
            self.service.delete_order(self.order.pk, self.admin.pk)

        self.assertFalse(Order.objects.filter(pk=self.order.pk).exists())
        self.assertEqual(Payment.objects.count(), 0)
        self.assertEqual(self.publisher.events[-1], ("order_deleted", {"id": str(self.order.pk)}))

    def test_delete_by_other_admin_is_forbidden(self):
        with self.assertRaises(ForbiddenError):
            self.service.delete_order(self.order.pk, self.other_admin.pk)
        self.assertTrue(Order.objects.filter(pk=self.order.pk).exists())
