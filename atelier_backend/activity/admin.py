# activity/admin.py

from django.contrib import admin

from activity.models import Notification, RecentUpdate


@admin.register(RecentUpdate)
class RecentUpdateAdmin(admin.ModelAdmin):
    list_display = ("type", "title", "admin", "created_at")
    list_filter = ("type",)
    search_fields = ("title", "description")
    raw_id_fields = ("admin",)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "type", "priority", "is_read", "admin", "created_at")
    list_filter = ("type", "priority", "is_read")
    search_fields = ("title", "message")
    raw_id_fields = ("admin",)
