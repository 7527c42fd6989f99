# orders/api/views/payments.py

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.cache import to_plain
from orders.api.errors import domain_error_response
from orders.serializers import PaymentInputSerializer, PaymentSerializer
from orders.services import get_order_service, get_payment_ledger
from orders.services.exceptions import OrderServiceError


class OrderPaymentsView(APIView):
    """
    /orders/<order_id>/payments/

    GET  -> payments newest first + {totalPaid, remainingBalance, isFullyPaid}
    POST -> record a payment (400 with balance details when it would overdraw)
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, order_id):
        try:
            result = get_payment_ledger().list_payments(order_id, request.user.pk)
        except OrderServiceError as exc:
            return domain_error_response(exc)

        return Response(
            to_plain(
                {
                    "payments": PaymentSerializer(result["payments"], many=True).data,
                    "summary": result["summary"],
                }
            )
        )

    @extend_schema(request=PaymentInputSerializer, responses={201: PaymentSerializer})
    def post(self, request, order_id):
        serializer = PaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = get_payment_ledger().add_payment(
                order_id,
                request.user.pk,
                serializer.validated_data["amount"],
                notes=serializer.validated_data.get("notes"),
            )
        except OrderServiceError as exc:
            return domain_error_response(exc)

        return Response(
            to_plain(
                {
                    "payment": PaymentSerializer(result["payment"]).data,
                    "order": get_order_service().serialize(result["order"]),
                    "summary": result["summary"],
                }
            ),
            status=status.HTTP_201_CREATED,
        )


class PaymentDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={204: None})
    def delete(self, request, payment_id):
        try:
            get_payment_ledger().delete_payment(payment_id, request.user.pk)
        except OrderServiceError as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
