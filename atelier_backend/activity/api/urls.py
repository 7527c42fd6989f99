# activity/api/urls.py

from django.urls import path

from activity.api.views import (
    ActivitySummaryView,
    NotificationDetailView,
    NotificationListView,
    NotificationMarkAllReadView,
    NotificationReadView,
    RecentUpdateListView,
    UnreadCountView,
)

urlpatterns = [
    path("notifications/", NotificationListView.as_view(), name="notification-list"),
    path("notifications/unread-count/", UnreadCountView.as_view(), name="notification-unread-count"),
    path(
        "notifications/mark-all-read/",
        NotificationMarkAllReadView.as_view(),
        name="notification-mark-all-read",
    ),
    path(
        "notifications/<uuid:notification_id>/read/",
        NotificationReadView.as_view(),
        name="notification-read",
    ),
    path(
        "notifications/<uuid:notification_id>/",
        NotificationDetailView.as_view(),
        name="notification-detail",
    ),
    path("recent-updates/", RecentUpdateListView.as_view(), name="recent-update-list"),
    path("recent-updates/summary/", ActivitySummaryView.as_view(), name="recent-update-summary"),
]
