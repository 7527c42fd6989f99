from decimal import Decimal
from unittest import mock
import uuid

import redis
from django.test import SimpleTestCase

from common.cache import (
    InMemoryCacheStore,
    RedisCacheStore,
    build_cache_store,
    to_plain,
)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class InMemoryCacheStoreTests(SimpleTestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.store = InMemoryCacheStore(max_entries=3, clock=self.clock)

    def test_round_trip_returns_json_plain_value(self):
        self.store.set("order:1", {"price": Decimal("10.00"), "id": uuid.UUID(int=1)}, ttl=60)
        self.assertEqual(
            self.store.get("order:1"),
            {"price": "10.00", "id": "00000000-0000-0000-0000-000000000001"},
        )

    def test_entry_expires_after_ttl(self):
        self.store.set("k", 1, ttl=10)
        self.clock.now = 9.9
        self.assertEqual(self.store.get("k"), 1)
        self.clock.now = 10
        self.assertIsNone(self.store.get("k"))
        self.assertEqual(len(self.store), 0)

    def test_oldest_entry_is_evicted_when_full(self):
        for key in ("a", "b", "c", "d"):
            self.store.set(key, key, ttl=60)

        self.assertIsNone(self.store.get("a"))
        self.assertEqual(self.store.get("d"), "d")
        self.assertEqual(len(self.store), 3)

    def test_delete_pattern(self):
        store = InMemoryCacheStore(max_entries=10, clock=self.clock)
        store.set("orders:admin:1:1:10", 1, ttl=60)
        store.set("orders:admin:1:2:10", 1, ttl=60)
        store.set("orders:admin:2:1:10", 1, ttl=60)
        store.set("order:9", 1, ttl=60)

        self.assertEqual(store.delete_pattern("orders:admin:1:*"), 2)
        self.assertIsNotNone(store.get("orders:admin:2:1:10"))
        self.assertIsNotNone(store.get("order:9"))

    def test_sweep_drops_expired_entries(self):
        self.store.set("short", 1, ttl=1)
        self.store.set("long", 1, ttl=100)
        self.clock.now = 5

        self.assertEqual(self.store.sweep(), 1)
        self.assertEqual(len(self.store), 1)

    def test_unserializable_value_is_not_stored(self):
        self.store.set("bad", object(), ttl=60)
        self.assertIsNone(self.store.get("bad"))

    def test_sweeper_thread_starts_and_stops(self):
        store = InMemoryCacheStore(sweep_interval=0.01)
        store.start_sweeper()
        self.assertTrue(store._sweeper.is_alive())
        store.stop_sweeper()
        self.assertIsNone(store._sweeper)


class RedisCacheStoreTests(SimpleTestCase):
    """Backend failures degrade to a miss / no-op, never an exception."""

    def setUp(self):
        self.client = mock.Mock()
        self.store = RedisCacheStore(self.client)

    def test_get_decodes_json(self):
        self.client.get.return_value = b'{"a": 1}'
        self.assertEqual(self.store.get("k"), {"a": 1})

    def test_set_uses_ttl(self):
        self.store.set("k", {"a": 1}, ttl=300)
        self.client.setex.assert_called_once_with("k", 300, '{"a": 1}')

    def test_failures_are_swallowed(self):
        self.client.get.side_effect = redis.ConnectionError("down")
        self.client.setex.side_effect = redis.ConnectionError("down")
        self.client.delete.side_effect = redis.ConnectionError("down")
        self.client.scan_iter.side_effect = redis.ConnectionError("down")

        self.assertIsNone(self.store.get("k"))
        self.store.set("k", 1)
        self.store.delete("k")
        self.assertEqual(self.store.delete_pattern("orders:*"), 0)

    def test_delete_pattern_scans_then_deletes(self):
        self.client.scan_iter.return_value = iter([b"orders:admin:1:1:10", b"orders:admin:1:2:10"])
        self.client.delete.return_value = 2

        self.assertEqual(self.store.delete_pattern("orders:admin:1:*"), 2)
        self.client.delete.assert_called_once_with(b"orders:admin:1:1:10", b"orders:admin:1:2:10")


class BuildCacheStoreTests(SimpleTestCase):
    def test_in_memory_without_redis_url(self):
        store = build_cache_store({"REDIS_URL": "", "MAX_ENTRIES": 5, "START_SWEEPER": False})
        self.assertIsInstance(store, InMemoryCacheStore)
        self.assertEqual(store.max_entries, 5)

    def test_redis_when_url_is_set(self):
        store = build_cache_store({"REDIS_URL": "redis://localhost:6379/0"})
        self.assertIsInstance(store, RedisCacheStore)

    def test_to_plain(self):
        self.assertEqual(to_plain({"n": Decimal("1.50")}), {"n": "1.50"})
