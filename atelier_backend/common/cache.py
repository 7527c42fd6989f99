# common/cache.py

"""
CACHE STORE (ADVISORY)

Two interchangeable stores behind one small interface:
- RedisCacheStore: shared cache for multi-process deployments (redis-py)
- InMemoryCacheStore: bounded per-process TTL map with its own sweep thread

RULES:
- The cache is never a source of truth.
- Backend failures are logged and swallowed: get() degrades to a miss,
  writes and deletes degrade to no-ops.
- Values are JSON-encoded (DjangoJSONEncoder) in both stores, so a hit
  returns the same plain data regardless of the backend.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Optional

import redis
from django.core.serializers.json import DjangoJSONEncoder

logger = logging.getLogger(__name__)


def _encode(value: Any) -> str:
    return json.dumps(value, cls=DjangoJSONEncoder)


def _decode(raw) -> Any:
    if raw is None:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return json.loads(raw)


class CacheStore:
    """
    Interface used by the order services.

    Subclasses implement the four operations and must never raise on
    backend unavailability.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl: int = 60) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def delete_pattern(self, pattern: str) -> int:
        raise NotImplementedError

    def close(self) -> None:
        return None


# ============================================================
# REDIS
# ============================================================


class RedisCacheStore(CacheStore):
    SCAN_BATCH = 500

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCacheStore":
        client = redis.Redis.from_url(
            url,
            socket_connect_timeout=1,
            socket_timeout=1,
            retry_on_timeout=False,
        )
        return cls(client)

    def get(self, key: str) -> Optional[Any]:
        try:
            return _decode(self.client.get(key))
        except (redis.RedisError, ValueError):
            logger.warning("Cache get failed", extra={"key": key}, exc_info=True)
            return None

    def set(self, key: str, value: Any, ttl: int = 60) -> None:
        try:
            self.client.setex(key, int(ttl), _encode(value))
        except (redis.RedisError, TypeError, ValueError):
            logger.warning("Cache set failed", extra={"key": key}, exc_info=True)

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except redis.RedisError:
            logger.warning("Cache delete failed", extra={"key": key}, exc_info=True)

    def delete_pattern(self, pattern: str) -> int:
        try:
            keys = list(self.client.scan_iter(match=pattern, count=self.SCAN_BATCH))
            if not keys:
                return 0
            return int(self.client.delete(*keys))
        except redis.RedisError:
            logger.warning(
                "Cache delete pattern failed",
                extra={"pattern": pattern},
                exc_info=True,
            )
            return 0

    def close(self) -> None:
        try:
            self.client.close()
        except redis.RedisError:
            logger.warning("Cache close failed", exc_info=True)


# ============================================================
# IN-MEMORY
# ============================================================


class InMemoryCacheStore(CacheStore):
    """
    Bounded TTL map.

    - Oldest entry is evicted once max_entries is reached.
    - Expired entries are dropped lazily on read and by the sweeper thread.
    """

    def __init__(
        self,
        *,
        max_entries: int = 1000,
        sweep_interval: float = 60.0,
        clock=time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")

        self.max_entries = max_entries
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: "OrderedDict[str, tuple[float, str]]" = OrderedDict()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, raw = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
        return _decode(raw)

    def set(self, key: str, value: Any, ttl: int = 60) -> None:
        try:
            raw = _encode(value)
        except (TypeError, ValueError):
            logger.warning("Cache set failed", extra={"key": key}, exc_info=True)
            return

        with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
            self._entries[key] = (self._clock() + ttl, raw)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def delete_pattern(self, pattern: str) -> int:
        with self._lock:
            doomed = [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]
            for k in doomed:
                del self._entries[k]
        return len(doomed)

    def sweep(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, (exp, _) in self._entries.items() if exp <= now]
            for k in expired:
                del self._entries[k]
        return len(expired)

    def start_sweeper(self) -> None:
        if self._sweeper is not None and self._sweeper.is_alive():
            return

        self._stop.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop,
            name="order-cache-sweeper",
            daemon=True,
        )
        self._sweeper.start()

    def stop_sweeper(self) -> None:
        self._stop.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=self.sweep_interval)
            self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self.sweep_interval):
            removed = self.sweep()
            if removed:
                logger.debug("Cache sweep removed entries", extra={"removed": removed})

    def close(self) -> None:
        self.stop_sweeper()


# ============================================================
# FACTORY
# ============================================================


def build_cache_store(config: dict) -> CacheStore:
    """
    Select the store once, at startup, from configuration presence.
    """
    url = (config.get("REDIS_URL") or "").strip()
    if url:
        logger.info("Order cache backend: redis")
        return RedisCacheStore.from_url(url)

    store = InMemoryCacheStore(
        max_entries=int(config.get("MAX_ENTRIES", 1000)),
        sweep_interval=float(config.get("SWEEP_INTERVAL", 60)),
    )
    if config.get("START_SWEEPER", True):
        store.start_sweeper()

    logger.info("Order cache backend: in-memory")
    return store


def to_plain(value: Any) -> Any:
    """
    Normalize serializer output to the exact shape a cache hit returns
    (UUID / Decimal / datetime become strings).
    """
    return _decode(_encode(value))
