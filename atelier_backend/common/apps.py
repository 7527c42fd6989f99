# common/apps.py

"""
COMMON APP CONFIG

Owns process-wide collaborators that are created ONCE at startup and passed
down to the domain services:
- cache_store      (common.cache)
- event_publisher  (common.events)

Nothing is built at import time; ready() does the wiring.
"""

from django.apps import AppConfig, apps
from django.conf import settings


class CommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
    verbose_name = "Shared infrastructure"

    cache_store = None
    event_publisher = None

    def ready(self):
        from common.cache import build_cache_store
        from common.events import build_event_publisher

        self.cache_store = build_cache_store(settings.ORDER_CACHE)
        self.event_publisher = build_event_publisher(settings.REALTIME_EVENTS_BACKEND)


def get_common_config() -> CommonConfig:
    return apps.get_app_config("common")
