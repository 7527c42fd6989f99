# orders/api/views/orders.py

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.api.errors import domain_error_response
from orders.serializers import (
    OrderCreateInputSerializer,
    OrderDetailsInputSerializer,
    OrderSerializer,
    OrderStatusInputSerializer,
)
from orders.services import get_order_service
from orders.services.exceptions import OrderServiceError

PAGINATION_PARAMS = [
    OpenApiParameter("page", int, description="1-based page number"),
    OpenApiParameter("pageSize", int, description="Rows per page (max 100)"),
]


def _page_params(request):
    params = request.query_params
    return (
        params.get("page", 1),
        params.get("pageSize") or params.get("page_size") or 10,
    )


class ClientOrdersView(APIView):
    """
    /clients/<client_id>/orders/

    GET  -> paginated orders of one client
    POST -> create an order for that client
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(parameters=PAGINATION_PARAMS, description="List one client's orders")
    def get(self, request, client_id):
        page, page_size = _page_params(request)
        try:
            result = get_order_service().list_client_orders(
                client_id, request.user.pk, page=page, page_size=page_size
            )
        except OrderServiceError as exc:
            return domain_error_response(exc)
        return Response(result)

    @extend_schema(
        request=OrderCreateInputSerializer,
        responses={201: OrderSerializer},
        description="Create an order (optionally with an initial deposit payment)",
    )
    def post(self, request, client_id):
        serializer = OrderCreateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = get_order_service()
        try:
            order = service.create_order(request.user.pk, client_id, **serializer.validated_data)
        except OrderServiceError as exc:
            return domain_error_response(exc)

        return Response(service.serialize(order), status=status.HTTP_201_CREATED)


class EventOrderCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=OrderCreateInputSerializer,
        responses={201: OrderSerializer},
        description="Create an order for a client participating in an event",
    )
    def post(self, request, event_id, client_id):
        serializer = OrderCreateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = get_order_service()
        try:
            order = service.create_order_for_event(
                request.user.pk, event_id, client_id, **serializer.validated_data
            )
        except OrderServiceError as exc:
            return domain_error_response(exc)

        return Response(service.serialize(order), status=status.HTTP_201_CREATED)


class OrderListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(parameters=PAGINATION_PARAMS, description="List all orders of the admin")
    def get(self, request):
        page, page_size = _page_params(request)
        try:
            result = get_order_service().list_orders(request.user.pk, page=page, page_size=page_size)
        except OrderServiceError as exc:
            return domain_error_response(exc)
        return Response(result)


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OrderSerializer})
    def get(self, request, order_id):
        try:
            data = get_order_service().get_order(order_id, request.user.pk)
        except OrderServiceError as exc:
            return domain_error_response(exc)
        return Response(data)

    @extend_schema(responses={204: None}, description="Hard delete (payments cascade)")
    def delete(self, request, order_id):
        try:
            get_order_service().delete_order(order_id, request.user.pk)
        except OrderServiceError as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OrderStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=OrderStatusInputSerializer, responses={200: OrderSerializer})
    def patch(self, request, order_id):
        serializer = OrderStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = get_order_service()
        try:
            order = service.update_status(
                order_id, serializer.validated_data["status"], request.user.pk
            )
        except OrderServiceError as exc:
            return domain_error_response(exc)

        return Response(service.serialize(order))


class OrderDetailsUpdateView(APIView):
    """
    PUT /orders/<order_id>/details/

    Only the keys present in the body are applied. price / deposit are
    locked (403) once the order has any payment.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(request=OrderDetailsInputSerializer, responses={200: OrderSerializer})
    def put(self, request, order_id):
        serializer = OrderDetailsInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = get_order_service()
        try:
            order = service.update_details(order_id, request.user.pk, **serializer.validated_data)
        except OrderServiceError as exc:
            return domain_error_response(exc)

        return Response(service.serialize(order))
