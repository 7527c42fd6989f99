# orders/services/__init__.py

"""
SERVICE WIRING

The order service and payment ledger are built once per process from the
collaborators CommonConfig.ready() created at startup. Tests construct
their own instances with fakes instead of going through these accessors.
"""

from functools import lru_cache


@lru_cache(maxsize=1)
def get_order_service():
    from django.conf import settings

    from activity.services.recorder import build_activity_recorder
    from common.apps import get_common_config
    from orders.services.order_service import OrderService

    config = get_common_config()
    return OrderService(
        cache=config.cache_store,
        publisher=config.event_publisher,
        activity=build_activity_recorder(config.event_publisher),
        ttl=settings.ORDER_CACHE["TTL"],
    )


@lru_cache(maxsize=1)
def get_payment_ledger():
    from activity.services.recorder import build_activity_recorder
    from common.apps import get_common_config
    from orders.services.payment_ledger import PaymentLedger

    config = get_common_config()
    return PaymentLedger(
        cache=config.cache_store,
        publisher=config.event_publisher,
        activity=build_activity_recorder(config.event_publisher),
    )
