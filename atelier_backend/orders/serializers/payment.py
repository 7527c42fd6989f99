# orders/serializers/payment.py

from rest_framework import serializers

from orders.models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    """Payment row (read-only). Corrections are delete + recreate."""

    class Meta:
        model = Payment
        fields = [
            "id",
            "order",
            "amount",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class PaymentInputSerializer(serializers.Serializer):
    """
    Documents ONLY what the client may send.

    amount is kept as raw input: the ledger parses it and raises
    InvalidPaymentAmountError for unparseable / non-positive values.
    """

    amount = serializers.JSONField(help_text="Positive amount, e.g. 2500.00")
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)
