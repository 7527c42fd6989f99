# activity/serializers/feed.py

from rest_framework import serializers

from activity.models import Notification, RecentUpdate


class RecentUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = RecentUpdate
        fields = [
            "id",
            "type",
            "title",
            "description",
            "entity_id",
            "entity_type",
            "created_at",
        ]
        read_only_fields = fields


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "priority",
            "title",
            "message",
            "is_read",
            "read_at",
            "entity_id",
            "entity_type",
            "action_url",
            "created_at",
        ]
        read_only_fields = fields
