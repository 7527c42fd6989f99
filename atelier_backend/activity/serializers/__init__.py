from .feed import NotificationSerializer, RecentUpdateSerializer

__all__ = ["NotificationSerializer", "RecentUpdateSerializer"]
