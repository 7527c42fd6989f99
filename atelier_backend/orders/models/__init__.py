# orders/models/__init__.py

"""
ORDERS MODELS PACKAGE EXPORTS
"""

from .order import Order
from .order_style_image import OrderStyleImage
from .payment import Payment

__all__ = [
    "Order",
    "OrderStyleImage",
    "Payment",
]
