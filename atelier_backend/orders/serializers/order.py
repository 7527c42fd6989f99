# orders/serializers/order.py

from rest_framework import serializers

from clients.models import Client, Event, Project, StyleImage
from orders.models import Order
from orders.serializers.payment import PaymentSerializer


class OrderClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ["id", "name", "email", "phone"]
        read_only_fields = fields


class OrderProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ["id", "name", "status"]
        read_only_fields = fields


class OrderEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = Event
        fields = ["id", "name", "event_date"]
        read_only_fields = fields


class OrderStyleImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = StyleImage
        fields = ["id", "image_url", "category", "description"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    CANONICAL ORDER SERIALIZER

    Output of this serializer is what the order cache stores, so every
    field must be JSON-plain (DjangoJSONEncoder handles UUID / Decimal /
    datetime).
    """

    client = OrderClientSerializer(read_only=True)
    project = OrderProjectSerializer(read_only=True)
    event = OrderEventSerializer(read_only=True)
    style_images = OrderStyleImageSerializer(many=True, read_only=True)
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "admin",
            "client",
            "project",
            "event",
            "details",
            "price",
            "currency",
            "due_date",
            "status",
            "deposit",
            "style_description",
            "style_images",
            "payments",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderCreateInputSerializer(serializers.Serializer):
    """
    Create payload.

    price / deposit / due_date are passed through raw: the order service
    owns their validation so the same error types surface for every caller.
    """

    details = serializers.JSONField(required=False)
    price = serializers.JSONField()
    currency = serializers.CharField(required=False, max_length=3)
    due_date = serializers.JSONField(required=False, allow_null=True)
    status = serializers.CharField(required=False)
    project_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    event_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    deposit = serializers.JSONField(required=False, allow_null=True)
    style_description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    style_image_ids = serializers.ListField(child=serializers.UUIDField(), required=False)


class OrderDetailsInputSerializer(OrderCreateInputSerializer):
    """Partial update: only keys present in the payload are applied."""

    price = serializers.JSONField(required=False)
    status = None


class OrderStatusInputSerializer(serializers.Serializer):
    status = serializers.CharField()
