# clients/models/event.py

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Event(models.Model):
    """
    An occasion several clients take part in (wedding, show, party).

    Participants are linked through EventClient; an order tied to an event
    requires its client to be a participant.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    admin = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="events",
    )

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    event_date = models.DateTimeField(null=True, blank=True)

    clients = models.ManyToManyField(
        "clients.Client",
        through="clients.EventClient",
        related_name="events",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["admin", "created_at"], name="event_admin_created_idx"),
        ]

    def has_participant(self, client_id) -> bool:
        return self.participants.filter(client_id=client_id).exists()

    def __str__(self):
        return self.name


class EventClient(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name="participants",
    )
    client = models.ForeignKey(
        "clients.Client",
        on_delete=models.CASCADE,
        related_name="event_links",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["event", "client"],
                name="uniq_event_client",
            ),
        ]

    def __str__(self):
        return f"{self.event_id} <- {self.client_id}"
