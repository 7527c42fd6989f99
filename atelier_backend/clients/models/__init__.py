# clients/models/__init__.py

"""
CLIENTS MODELS PACKAGE EXPORTS

Everything here is owned by exactly one Admin (users.User).
"""

from .client import Client
from .event import Event, EventClient
from .project import Project
from .style_image import StyleImage

__all__ = [
    "Client",
    "Project",
    "Event",
    "EventClient",
    "StyleImage",
]
