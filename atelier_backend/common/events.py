# common/events.py

"""
REALTIME CHANGE EVENTS

Fire-and-forget "something changed" events for connected clients.

RULES:
- No delivery guarantee, no acknowledgement.
- Publishing never fails the caller: errors are logged and swallowed.
- Domain services publish AFTER commit (publish_on_commit), so subscribers
  never observe rows that were rolled back.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.dispatch import Signal

logger = logging.getLogger(__name__)

# Receivers get: sender, event_name, payload
realtime_event = Signal()


class EventPublisher:
    def publish(self, event_name: str, payload: Any) -> None:
        raise NotImplementedError


class NullEventPublisher(EventPublisher):
    """Default publisher: drops everything."""

    def publish(self, event_name: str, payload: Any) -> None:
        return None


class SignalEventPublisher(EventPublisher):
    """
    Re-broadcasts events as the `realtime_event` Django signal.

    A websocket layer (or anything else) subscribes with
    realtime_event.connect(...).
    """

    def publish(self, event_name: str, payload: Any) -> None:
        responses = realtime_event.send_robust(
            sender=self.__class__,
            event_name=event_name,
            payload=payload,
        )
        for receiver, result in responses:
            if isinstance(result, Exception):
                logger.warning(
                    "Realtime receiver failed",
                    extra={"event_name": event_name, "receiver": repr(receiver)},
                    exc_info=(type(result), result, result.__traceback__),
                )


class RecordingEventPublisher(EventPublisher):
    """Keeps published events in memory. Used by tests and diagnostics."""

    def __init__(self):
        self.events: list[tuple[str, Any]] = []

    def publish(self, event_name: str, payload: Any) -> None:
        self.events.append((event_name, payload))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


def safe_publish(publisher: EventPublisher, event_name: str, payload: Any) -> None:
    try:
        publisher.publish(event_name, payload)
    except Exception:
        logger.exception("Failed to publish realtime event", extra={"event_name": event_name})


def publish_on_commit(publisher: EventPublisher, event_name: str, payload: Any) -> None:
    transaction.on_commit(lambda: safe_publish(publisher, event_name, payload))


def build_event_publisher(backend: str) -> EventPublisher:
    backend = (backend or "").strip().lower()
    if backend == "signal":
        return SignalEventPublisher()
    if backend in ("", "null", "none"):
        return NullEventPublisher()
    raise ValueError(f"Unknown REALTIME_EVENTS_BACKEND: {backend!r}")
