# activity/services/tracker.py

"""
ACTIVITY FEED

track_activity() is best-effort: a failed insert is logged and never
propagates into the operation that triggered it.
"""

import logging
from collections import Counter
from datetime import timedelta, timezone as dt_timezone
from decimal import ROUND_HALF_UP, Decimal

from django.db import DatabaseError
from django.utils import timezone

from activity.models import RecentUpdate
from clients.models import Client, StyleImage
from orders.models import Order

logger = logging.getLogger("activity")

MAX_LIMIT = 100


def track_activity(admin_id, type, title, description="", entity_id=None, entity_type=""):
    try:
        return RecentUpdate.objects.create(
            admin_id=admin_id,
            type=type,
            title=title,
            description=description or "",
            entity_id=str(entity_id) if entity_id is not None else "",
            entity_type=entity_type or "",
        )
    except DatabaseError:
        logger.exception(
            "Failed to track activity",
            extra={"admin_id": str(admin_id), "type": type, "entity_id": str(entity_id)},
        )
        return None


def get_recent_updates(admin_id, limit=20):
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        limit = 20
    limit = max(1, min(MAX_LIMIT, limit))
    return list(RecentUpdate.objects.filter(admin_id=admin_id).order_by("-created_at")[:limit])


def cleanup_old_updates(admin_id, days_to_keep=30) -> int:
    cutoff = timezone.now() - timedelta(days=days_to_keep)
    deleted, _ = RecentUpdate.objects.filter(admin_id=admin_id, created_at__lt=cutoff).delete()
    return deleted


def get_activity_summary(admin_id, days=7) -> dict:
    """
    Counts over the last `days` days.

    byDay is keyed by UTC calendar date (YYYY-MM-DD); mostActiveDay is the
    earliest day holding the highest count.
    """
    days = max(1, int(days))
    since = timezone.now() - timedelta(days=days)

    activities = list(
        RecentUpdate.objects.filter(admin_id=admin_id, created_at__gte=since)
        .order_by("created_at")
        .values_list("type", "created_at")
    )

    by_type = Counter(t for t, _ in activities)
    by_day = Counter(created.astimezone(dt_timezone.utc).date().isoformat() for _, created in activities)

    most_active = None
    for day, count in by_day.items():
        if most_active is None or count > most_active["count"]:
            most_active = {"date": day, "count": count}

    average = Decimal(len(activities)) / Decimal(days)

    return {
        "totalActivities": len(activities),
        "totalClients": Client.objects.filter(admin_id=admin_id).count(),
        "totalOrders": Order.objects.filter(admin_id=admin_id).count(),
        "totalGalleryStyles": StyleImage.objects.filter(admin_id=admin_id).count(),
        "byType": dict(by_type),
        "byDay": dict(by_day),
        "mostActiveDay": most_active,
        "averagePerDay": float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)),
    }
