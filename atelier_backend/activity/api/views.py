# activity/api/views.py

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from activity.serializers import NotificationSerializer, RecentUpdateSerializer
from activity.services.notifications import NotificationNotFoundError, NotificationService
from activity.services.tracker import get_activity_summary, get_recent_updates
from common.apps import get_common_config


def _truthy(value) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes")


def _notifications() -> NotificationService:
    return NotificationService(get_common_config().event_publisher)


class NotificationListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[
            OpenApiParameter("page", int),
            OpenApiParameter("limit", int, description="1..100, default 20"),
            OpenApiParameter("unreadOnly", bool),
            OpenApiParameter("type", str),
        ],
        description="Notifications ordered by priority (URGENT first), then newest",
    )
    def get(self, request):
        params = request.query_params
        result = _notifications().get_notifications(
            request.user.pk,
            page=params.get("page", 1),
            limit=params.get("limit", 20),
            unread_only=_truthy(params.get("unreadOnly", "")),
            type=params.get("type") or None,
        )
        result["notifications"] = NotificationSerializer(result["notifications"], many=True).data
        return Response(result)


class UnreadCountView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"unreadCount": _notifications().get_unread_count(request.user.pk)})


class NotificationReadView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: NotificationSerializer})
    def patch(self, request, notification_id):
        try:
            notification = _notifications().mark_as_read(request.user.pk, notification_id)
        except NotificationNotFoundError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(NotificationSerializer(notification).data)


class NotificationMarkAllReadView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request):
        updated = _notifications().mark_all_as_read(request.user.pk)
        return Response({"updated": updated})


class NotificationDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={204: None})
    def delete(self, request, notification_id):
        try:
            _notifications().delete_notification(request.user.pk, notification_id)
        except NotificationNotFoundError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecentUpdateListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[OpenApiParameter("limit", int, description="1..100, default 20")],
        responses={200: RecentUpdateSerializer(many=True)},
    )
    def get(self, request):
        updates = get_recent_updates(request.user.pk, limit=request.query_params.get("limit", 20))
        return Response(RecentUpdateSerializer(updates, many=True).data)


class ActivitySummaryView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(parameters=[OpenApiParameter("days", int, description="Window, default 7")])
    def get(self, request):
        try:
            days = int(request.query_params.get("days", 7))
        except ValueError:
            return Response({"detail": "days must be an integer"}, status=status.HTTP_400_BAD_REQUEST)
        return Response(get_activity_summary(request.user.pk, days=days))
