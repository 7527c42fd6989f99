# orders/apps.py

"""
ORDERS APP CONFIG

Order & Payment Ledger:
- Orders (price, deposit, lifecycle status)
- Payments (append/delete only, never exceed order price)
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders & Payments"
