# orders/tests/factories.py

"""Minimal fixtures shared by the order / payment tests."""

from django.contrib.auth import get_user_model

from clients.models import Client, Event, EventClient, Project, StyleImage
from common.cache import InMemoryCacheStore
from common.events import RecordingEventPublisher
from orders.services.order_service import OrderService
from orders.services.payment_ledger import PaymentLedger

User = get_user_model()


def make_admin(email="designer@example.com"):
    return User.objects.create_user(email=email, password="pass", business_name="Atelier")


def make_client(admin, name="Ada Obi"):
    return Client.objects.create(admin=admin, name=name)


def make_event(admin, *participants, name="Wedding"):
    event = Event.objects.create(admin=admin, name=name)
    for client in participants:
        EventClient.objects.create(event=event, client=client)
    return event


def make_project(admin, client, name="Aso-ebi set"):
    return Project.objects.create(admin=admin, client=client, name=name)


def make_style_image(admin, client=None):
    return StyleImage.objects.create(
        admin=admin,
        client=client,
        image_url="https://img.example.com/style.jpg",
    )


def make_services(activity=None):
    """Fresh collaborators per test: (service, ledger, cache, publisher)."""
    cache = InMemoryCacheStore(max_entries=100)
    publisher = RecordingEventPublisher()
    service = OrderService(cache=cache, publisher=publisher, activity=activity)
    ledger = PaymentLedger(cache=cache, publisher=publisher, activity=activity)
    return service, ledger, cache, publisher
