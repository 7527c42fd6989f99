# orders/services/ownership.py

"""
OWNERSHIP CHECKS

Every entity reachable from an order must belong to the acting admin.
Missing rows raise the specific NotFound error; foreign rows raise Forbidden.
"""

from django.core.exceptions import ValidationError

from clients.models import Client, Event, Project
from orders.models import Order
from orders.services.exceptions import (
    ClientNotFoundError,
    ClientNotInEventError,
    EventNotFoundError,
    ForbiddenError,
    OrderNotFoundError,
    ProjectNotFoundError,
    UnauthorizedError,
)


def require_admin(admin_id):
    if not admin_id:
        raise UnauthorizedError("Unauthorized")
    return admin_id


def _get_or_none(queryset, pk):
    try:
        return queryset.get(pk=pk)
    except (queryset.model.DoesNotExist, ValidationError, ValueError):
        return None


def _same_admin(obj, admin_id) -> bool:
    return str(obj.admin_id) == str(admin_id)


def get_owned_client(client_id, admin_id) -> Client:
    client = _get_or_none(Client.objects.all(), client_id)
    if client is None:
        raise ClientNotFoundError("Client not found")
    if not _same_admin(client, admin_id):
        raise ForbiddenError("Access denied to this client")
    return client


def get_owned_event(event_id, admin_id) -> Event:
    event = _get_or_none(Event.objects.all(), event_id)
    if event is None:
        raise EventNotFoundError("Event not found")
    if not _same_admin(event, admin_id):
        raise ForbiddenError("Access denied to this event")
    return event


def ensure_client_in_event(event: Event, client: Client) -> None:
    if not event.has_participant(client.pk):
        raise ClientNotInEventError("Client is not a participant in this event")


def get_owned_project(project_id, admin_id, client: Client) -> Project:
    project = _get_or_none(Project.objects.all(), project_id)
    if project is None:
        raise ProjectNotFoundError("Project not found")
    if not _same_admin(project, admin_id):
        raise ForbiddenError("Access denied to this project")
    if project.client_id != client.pk:
        raise ForbiddenError("Project does not belong to this client")
    return project


def get_owned_order(order_id, admin_id, *, queryset=None) -> Order:
    order = _get_or_none(queryset if queryset is not None else Order.objects.all(), order_id)
    if order is None:
        raise OrderNotFoundError("Order not found")
    if not _same_admin(order, admin_id):
        raise ForbiddenError("Access denied to this order")
    return order
