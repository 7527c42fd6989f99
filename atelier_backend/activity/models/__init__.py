from .notification import Notification
from .recent_update import RecentUpdate

__all__ = ["Notification", "RecentUpdate"]
