# orders/services/cache_keys.py

"""
CACHE KEYS + INVALIDATION POLICY

orders:admin:<admin_id>:<page>:<page_size>    admin order list page
orders:client:<client_id>:<page>:<page_size>  client order list page
order:<order_id>                              single order

Every write clears all list pages of the affected admin and client, plus
the single-order key when the order already existed.
"""

ORDER_CACHE_TTL = 300


def admin_orders_key(admin_id, page, page_size) -> str:
    return f"orders:admin:{admin_id}:{page}:{page_size}"


def client_orders_key(client_id, page, page_size) -> str:
    return f"orders:client:{client_id}:{page}:{page_size}"


def order_key(order_id) -> str:
    return f"order:{order_id}"


def invalidate_order_caches(cache, *, admin_id, client_id, order_id=None) -> None:
    cache.delete_pattern(f"orders:admin:{admin_id}:*")
    cache.delete_pattern(f"orders:client:{client_id}:*")
    if order_id is not None:
        cache.delete(order_key(order_id))
