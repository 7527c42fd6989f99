# orders/services/order_service.py

"""
ORDER SERVICE (AGGREGATE CRUD)

GUARANTEES:
- Every read and write re-verifies order.admin == admin_id
- Order + initial deposit Payment + style-image links commit together
- price / deposit are frozen while any Payment exists (checked live)
- Cache invalidation, change events and activity run only after commit

Reads are cache-first and return JSON-plain dicts, so a hit and a miss
return identical data.
"""

import logging
import math

from django.db import transaction

from activity.services.recorder import NullActivityRecorder
from clients.models import StyleImage
from common.cache import to_plain
from common.events import NullEventPublisher, publish_on_commit
from orders.models import Order, OrderStyleImage, Payment
from orders.serializers import OrderSerializer
from orders.services.cache_keys import (
    ORDER_CACHE_TTL,
    admin_orders_key,
    client_orders_key,
    invalidate_order_caches,
    order_key,
)
from orders.services.exceptions import (
    InvalidDateComponentsError,
    InvalidDateFormatError,
    InvalidDepositError,
    InvalidDueDateError,
    InvalidPriceError,
    OrderValidationError,
    PaymentLockedError,
)
from orders.services.money import MAX_PRICE, ZERO, _money, to_decimal
from orders.services.order_numbers import generate_order_number
from orders.services.ownership import (
    ensure_client_in_event,
    get_owned_client,
    get_owned_event,
    get_owned_order,
    get_owned_project,
    require_admin,
)
from orders.services.validators import (
    parse_order_date,
    validate_order_status,
    validate_price,
)

logger = logging.getLogger("orders")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

UPDATABLE_FIELDS = frozenset(
    {
        "details",
        "price",
        "currency",
        "due_date",
        "project_id",
        "event_id",
        "deposit",
        "style_description",
        "style_image_ids",
    }
)


def _clamp(value, default: int, *, upper: int | None = None) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        n = default
    n = max(1, n)
    if upper is not None:
        n = min(upper, n)
    return n


def _parse_price(value):
    if not validate_price(value):
        raise InvalidPriceError(
            "Invalid price. Must be a number with absolute value <= 9,999,999.99",
            details={"value": str(value)},
        )
    return _money(to_decimal(value))


def _parse_due_date(value):
    try:
        return parse_order_date(value)
    except (InvalidDateFormatError, InvalidDateComponentsError) as exc:
        raise InvalidDueDateError(f"Invalid due date: {exc.message}", details=exc.details) from exc


def _coerce_deposit(value):
    if value is None or value == "":
        return None

    d = to_decimal(value)
    if d is None or d < ZERO:
        raise InvalidDepositError(
            "Deposit must be a non-negative number",
            details={"value": str(value)},
        )
    if d > MAX_PRICE:
        raise InvalidDepositError(
            "Deposit cannot exceed 9,999,999.99",
            details={"value": str(value)},
        )
    return _money(d)


def _check_deposit(deposit, price):
    if deposit is not None and deposit > price:
        raise InvalidDepositError(
            "Deposit cannot exceed order price",
            details={"deposit": deposit, "price": price},
        )
    return deposit


def _blank(value) -> bool:
    return value is None or value == ""


class OrderService:
    """
    Constructed once at startup (orders.services.get_order_service) with:
    - cache:     common.cache.CacheStore
    - publisher: common.events.EventPublisher
    - activity:  activity.services.recorder.ActivityRecorder (or Null)
    """

    def __init__(self, *, cache, publisher=None, activity=None, ttl: int = ORDER_CACHE_TTL):
        self.cache = cache
        self.publisher = publisher or NullEventPublisher()
        self.activity = activity or NullActivityRecorder()
        self.ttl = ttl

    # ============================================================
    # HELPERS
    # ============================================================

    @staticmethod
    def _queryset():
        return Order.objects.select_related("client", "project", "event").prefetch_related(
            "payments", "style_images"
        )

    def load(self, order_id) -> Order:
        return self._queryset().get(pk=order_id)

    @staticmethod
    def serialize(order: Order) -> dict:
        return to_plain(OrderSerializer(order).data)

    def _after_commit(self, *, admin_id, client_id, order_id=None):
        cache = self.cache
        transaction.on_commit(
            lambda: invalidate_order_caches(
                cache, admin_id=admin_id, client_id=client_id, order_id=order_id
            )
        )

    def _paginate(self, queryset, page, page_size) -> dict:
        total = queryset.count()
        offset = (page - 1) * page_size
        rows = list(queryset[offset : offset + page_size])
        return {
            "data": to_plain(OrderSerializer(rows, many=True).data),
            "pagination": {
                "page": page,
                "pageSize": page_size,
                "total": total,
                "totalPages": math.ceil(total / page_size),
            },
        }

    # ============================================================
    # CREATE
    # ============================================================

    def create_order(
        self,
        admin_id,
        client_id,
        *,
        price,
        details=None,
        currency=None,
        due_date=None,
        status=None,
        project_id=None,
        event_id=None,
        deposit=None,
        style_description=None,
        style_image_ids=None,
    ) -> Order:
        require_admin(admin_id)

        price = _parse_price(price)
        due = _parse_due_date(due_date)

        client = get_owned_client(client_id, admin_id)

        event = None
        if not _blank(event_id):
            event = get_owned_event(event_id, admin_id)
            ensure_client_in_event(event, client)

        project = None
        if not _blank(project_id):
            project = get_owned_project(project_id, admin_id, client)

        deposit = _check_deposit(_coerce_deposit(deposit), price)
        status = validate_order_status(status) if status else Order.STATUS_PENDING_PAYMENT

        with transaction.atomic():
            order = Order.objects.create(
                admin_id=admin_id,
                client=client,
                project=project,
                event=event,
                order_number=generate_order_number(admin_id),
                details=details if details is not None else {},
                price=price,
                currency=(currency or Order.DEFAULT_CURRENCY).upper(),
                due_date=due,
                status=status,
                deposit=deposit,
                style_description=style_description,
            )

            if deposit is not None and deposit > ZERO:
                Payment.objects.create(
                    order=order,
                    amount=deposit,
                    notes=Payment.INITIAL_DEPOSIT_NOTE,
                )

            if style_image_ids:
                self._link_style_images(order, style_image_ids)

            order = self.load(order.pk)
            payload = self.serialize(order)

            self._after_commit(admin_id=admin_id, client_id=client.pk)
            publish_on_commit(self.publisher, "order_created", payload)
            activity = self.activity
            transaction.on_commit(lambda: activity.order_created(order))

        logger.info(
            "Order created",
            extra={
                "order_id": str(order.pk),
                "order_number": order.order_number,
                "admin_id": str(admin_id),
                "price": str(price),
                "deposit": str(deposit),
            },
        )
        return order

    def create_order_for_event(self, admin_id, event_id, client_id, **fields) -> Order:
        """Event-scoped create: event_id is mandatory and the client must participate."""
        require_admin(admin_id)
        if _blank(event_id):
            raise OrderValidationError("event_id is required")
        fields.pop("event_id", None)
        return self.create_order(admin_id, client_id, event_id=event_id, **fields)

    @staticmethod
    def _link_style_images(order: Order, style_image_ids) -> None:
        # Links are accepted as given; ids that do not resolve are skipped.
        wanted = list(dict.fromkeys(str(i) for i in style_image_ids))
        existing = set(
            str(pk) for pk in StyleImage.objects.filter(pk__in=wanted).values_list("pk", flat=True)
        )
        OrderStyleImage.objects.bulk_create(
            [OrderStyleImage(order=order, style_image_id=pk) for pk in wanted if pk in existing]
        )

    # ============================================================
    # READ
    # ============================================================

    def get_order(self, order_id, admin_id) -> dict:
        require_admin(admin_id)

        key = order_key(order_id)
        cached = self.cache.get(key)
        if cached is not None and str(cached.get("admin")) == str(admin_id):
            return cached

        order = get_owned_order(order_id, admin_id, queryset=self._queryset())
        data = self.serialize(order)
        self.cache.set(key, data, self.ttl)
        return data

    def list_orders(self, admin_id, page=1, page_size=DEFAULT_PAGE_SIZE) -> dict:
        require_admin(admin_id)
        page = _clamp(page, 1)
        page_size = _clamp(page_size, DEFAULT_PAGE_SIZE, upper=MAX_PAGE_SIZE)

        key = admin_orders_key(admin_id, page, page_size)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = self._paginate(self._queryset().filter(admin_id=admin_id), page, page_size)
        self.cache.set(key, result, self.ttl)
        return result

    def list_client_orders(self, client_id, admin_id, page=1, page_size=DEFAULT_PAGE_SIZE) -> dict:
        require_admin(admin_id)
        client = get_owned_client(client_id, admin_id)
        page = _clamp(page, 1)
        page_size = _clamp(page_size, DEFAULT_PAGE_SIZE, upper=MAX_PAGE_SIZE)

        key = client_orders_key(client.pk, page, page_size)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = self._paginate(self._queryset().filter(client=client), page, page_size)
        self.cache.set(key, result, self.ttl)
        return result

    # ============================================================
    # UPDATE
    # ============================================================

    def update_status(self, order_id, new_status, admin_id) -> Order:
        require_admin(admin_id)
        validate_order_status(new_status)

        with transaction.atomic():
            order = get_owned_order(
                order_id, admin_id, queryset=Order.objects.select_for_update()
            )
            previous = order.status
            order.status = new_status
            order.save(update_fields=["status", "updated_at"])

            order = self.load(order.pk)
            self._after_commit(admin_id=admin_id, client_id=order.client_id, order_id=order.pk)
            publish_on_commit(self.publisher, "order_updated", self.serialize(order))
            if previous != new_status:
                activity = self.activity
                transaction.on_commit(lambda: activity.order_status_changed(order, previous))

        logger.info(
            "Order status updated",
            extra={"order_id": str(order.pk), "from": previous, "to": new_status},
        )
        return order

    def update_details(self, order_id, admin_id, **changes) -> Order:
        """
        Apply only the keys present in `changes`.

        - price / deposit: PaymentLockedError if the order has payments and
          the value differs from what is stored
        - project_id / event_id: "" or None clears the link
        - style_image_ids: replaces the whole link set
        """
        require_admin(admin_id)

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise OrderValidationError(
                "Unknown order fields",
                details={"fields": sorted(unknown)},
            )

        with transaction.atomic():
            order = get_owned_order(
                order_id, admin_id, queryset=Order.objects.select_for_update()
            )
            has_payments = order.payments.exists()

            price = order.price
            if "price" in changes:
                price = _parse_price(changes["price"])
                if has_payments and price != order.price:
                    raise PaymentLockedError(
                        "Cannot modify price or deposit after payment",
                        details={"field": "price"},
                    )

            deposit = order.deposit
            if "deposit" in changes:
                deposit = _coerce_deposit(changes["deposit"])
                if has_payments and (deposit or ZERO) != (order.deposit or ZERO):
                    raise PaymentLockedError(
                        "Cannot modify price or deposit after payment",
                        details={"field": "deposit"},
                    )

            if "price" in changes or "deposit" in changes:
                _check_deposit(deposit, price)

            order.price = price
            order.deposit = deposit

            if "details" in changes:
                order.details = changes["details"] if changes["details"] is not None else {}

            if "currency" in changes:
                order.currency = (changes["currency"] or Order.DEFAULT_CURRENCY).upper()

            if "due_date" in changes:
                order.due_date = _parse_due_date(changes["due_date"])

            if "style_description" in changes:
                order.style_description = changes["style_description"]

            if "project_id" in changes:
                pid = changes["project_id"]
                order.project = (
                    None if _blank(pid) else get_owned_project(pid, admin_id, order.client)
                )

            if "event_id" in changes:
                eid = changes["event_id"]
                if _blank(eid):
                    order.event = None
                else:
                    event = get_owned_event(eid, admin_id)
                    ensure_client_in_event(event, order.client)
                    order.event = event

            order.save()

            if "style_image_ids" in changes:
                OrderStyleImage.objects.filter(order=order).delete()
                if changes["style_image_ids"]:
                    self._link_style_images(order, changes["style_image_ids"])

            order = self.load(order.pk)
            self._after_commit(admin_id=admin_id, client_id=order.client_id, order_id=order.pk)
            publish_on_commit(self.publisher, "order_updated", self.serialize(order))

        logger.info(
            "Order details updated",
            extra={"order_id": str(order.pk), "fields": sorted(changes)},
        )
        return order

    # ============================================================
    # DELETE
    # ============================================================

    def delete_order(self, order_id, admin_id) -> None:
        require_admin(admin_id)

        with transaction.atomic():
            order = get_owned_order(order_id, admin_id)
            client_id = order.client_id
            pk = order.pk
            order.delete()

            self._after_commit(admin_id=admin_id, client_id=client_id, order_id=pk)
            publish_on_commit(self.publisher, "order_deleted", {"id": str(pk)})

        logger.info("Order deleted", extra={"order_id": str(pk), "admin_id": str(admin_id)})
