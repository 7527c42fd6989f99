# backend/asgi.py
"""
ASGI entrypoint for the atelier backend.

A realtime layer can subscribe to common.events.realtime_event and push
order / payment / notification changes to connected clients.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_asgi_application()
