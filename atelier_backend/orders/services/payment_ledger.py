# orders/services/payment_ledger.py

"""
PAYMENT LEDGER

INVARIANT:
    sum(payments.amount) <= order.price   (after every committed mutation)

CONCURRENCY:
- add_payment locks the Order row (select_for_update) for the whole
  read-aggregate-insert sequence, so two concurrent payments against the
  same order are serialized and cannot jointly overdraw it.

Payments are never updated in place; corrections are delete + recreate.
"""

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Sum

from activity.services.recorder import NullActivityRecorder
from common.cache import to_plain
from common.events import NullEventPublisher, publish_on_commit
from orders.models import Order, Payment
from orders.serializers import PaymentSerializer
from orders.services.cache_keys import invalidate_order_caches
from orders.services.exceptions import (
    ForbiddenError,
    InvalidPaymentAmountError,
    PaymentExceedsBalanceError,
    PaymentNotFoundError,
)
from orders.services.money import MAX_PRICE, ZERO, _money, to_decimal
from orders.services.ownership import get_owned_order, require_admin

logger = logging.getLogger("payments")


def total_paid(order) -> Decimal:
    agg = Payment.objects.filter(order=order).aggregate(total=Sum("amount"))
    return _money(agg["total"])


def summarize(order) -> dict:
    """Fresh aggregate, never a precomputed running total."""
    paid = total_paid(order)
    remaining = _money(order.price - paid)
    return {
        "totalPaid": paid,
        "remainingBalance": remaining,
        "isFullyPaid": paid >= order.price,
    }


class PaymentLedger:
    def __init__(self, *, cache, publisher=None, activity=None):
        self.cache = cache
        self.publisher = publisher or NullEventPublisher()
        self.activity = activity or NullActivityRecorder()

    summarize = staticmethod(summarize)

    def _invalidate_on_commit(self, order) -> None:
        cache = self.cache
        admin_id, client_id, order_id = order.admin_id, order.client_id, order.pk
        transaction.on_commit(
            lambda: invalidate_order_caches(
                cache, admin_id=admin_id, client_id=client_id, order_id=order_id
            )
        )

    # ============================================================
    # ADD
    # ============================================================

    def add_payment(self, order_id, admin_id, amount, notes=None) -> dict:
        """
        Record a payment.

        Returns {payment, order, summary}. When the order becomes fully
        paid while still PENDING_PAYMENT it advances to PROCESSING.
        """
        require_admin(admin_id)

        parsed = to_decimal(amount)
        # Out-of-range magnitudes skip quantizing and fail the balance check below
        if parsed is not None and parsed.copy_abs() <= MAX_PRICE:
            parsed = _money(parsed)
        if parsed is None or parsed <= ZERO:
            logger.error("Invalid payment amount", extra={"amount": str(amount)})
            raise InvalidPaymentAmountError(
                "Payment amount must be a positive number",
                details={"value": str(amount)},
            )
        amt = parsed

        logger.info(
            "Initiating order payment",
            extra={"order_id": str(order_id), "admin_id": str(admin_id), "amount": str(amt)},
        )

        with transaction.atomic():
            order = get_owned_order(
                order_id, admin_id, queryset=Order.objects.select_for_update()
            )

            paid = total_paid(order)
            if paid + amt > order.price:
                remaining = _money(order.price - paid)
                logger.warning(
                    "Payment exceeds remaining balance",
                    extra={
                        "order_id": str(order.pk),
                        "order_total": str(order.price),
                        "total_paid": str(paid),
                        "attempted": str(amt),
                    },
                )
                raise PaymentExceedsBalanceError(
                    "Payment amount exceeds remaining balance",
                    details={
                        "orderTotal": order.price,
                        "totalPaid": paid,
                        "remainingBalance": remaining,
                        "attemptedPayment": amt,
                    },
                )

            payment = Payment.objects.create(order=order, amount=amt, notes=notes)

            summary = summarize(order)
            if summary["isFullyPaid"] and order.status == Order.STATUS_PENDING_PAYMENT:
                order.status = Order.STATUS_PROCESSING
                order.save(update_fields=["status", "updated_at"])

            self._invalidate_on_commit(order)
            publish_on_commit(
                self.publisher,
                "payment_added",
                to_plain(
                    {
                        "payment": PaymentSerializer(payment).data,
                        "orderId": order.pk,
                        "summary": summary,
                    }
                ),
            )
            activity = self.activity
            transaction.on_commit(lambda: activity.payment_received(order, payment))

        logger.info(
            "Order payment recorded",
            extra={
                "order_id": str(order.pk),
                "payment_id": str(payment.pk),
                "amount": str(amt),
                "total_paid": str(summary["totalPaid"]),
            },
        )

        return {"payment": payment, "order": order, "summary": summary}

    # ============================================================
    # READ
    # ============================================================

    def list_payments(self, order_id, admin_id) -> dict:
        require_admin(admin_id)
        order = get_owned_order(order_id, admin_id)
        payments = list(Payment.objects.filter(order=order).order_by("-created_at"))
        return {"payments": payments, "summary": summarize(order)}

    # ============================================================
    # DELETE
    # ============================================================

    def delete_payment(self, payment_id, admin_id) -> None:
        require_admin(admin_id)

        with transaction.atomic():
            try:
                payment = Payment.objects.select_related("order").get(pk=payment_id)
            except (Payment.DoesNotExist, ValidationError, ValueError) as exc:
                raise PaymentNotFoundError("Payment not found") from exc

            order = payment.order
            if str(order.admin_id) != str(admin_id):
                raise ForbiddenError("Access denied to this payment")

            pk = payment.pk
            payment.delete()

            self._invalidate_on_commit(order)
            publish_on_commit(
                self.publisher,
                "payment_deleted",
                {"paymentId": str(pk), "orderId": str(order.pk)},
            )

        logger.info(
            "Order payment deleted",
            extra={"payment_id": str(pk), "order_id": str(order.pk), "admin_id": str(admin_id)},
        )
