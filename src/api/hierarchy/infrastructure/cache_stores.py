"""Cache store implementations for the hierarchy cache.

InMemoryCacheStore keeps entries in the current process and suits a
single-process host and tests. RedisCacheStore shares entries and the
generation token between all processes of the host application.
"""

from __future__ import annotations

import threading
import time

import redis

from hierarchy.ports.cache import CacheStore
from hierarchy.ports.exceptions import CacheUnavailableError


class InMemoryCacheStore(CacheStore):
    """Thread-safe, process-local cache store.

    Holds at most max_entries values. Entries of superseded generations
    are never read again, so once the store is full expired values are
    swept and then the oldest written values are evicted. Counters created
    through add or incr are never evicted.
    """

    DEFAULT_MAX_ENTRIES = 10_000

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._data: dict[str, str] = {}
        self._expiry: dict[str, float] = {}
        self._counters: set[str] = set()
        self._lock = threading.Lock()

    def _purge_if_expired(self, key: str) -> None:
        # Caller holds the lock.
        expires_at = self._expiry.get(key)
        if expires_at is not None and time.monotonic() >= expires_at:
            self._data.pop(key, None)
            del self._expiry[key]

    def _evict_overflow(self) -> None:
        # Caller holds the lock. Dict order is write order.
        if len(self._data) <= self._max_entries:
            return

        now = time.monotonic()
        for key, expires_at in list(self._expiry.items()):
            if now >= expires_at:
                self._data.pop(key, None)
                del self._expiry[key]

        overflow = len(self._data) - self._max_entries
        if overflow <= 0:
            return
        victims = [key for key in self._data if key not in self._counters][:overflow]
        for key in victims:
            del self._data[key]
            self._expiry.pop(key, None)

    def get(self, key: str) -> str | None:
        with self._lock:
            self._purge_if_expired(key)
            return self._data.get(key)

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        with self._lock:
            self._data.pop(key, None)
            self._data[key] = value
            if ttl_seconds is None:
                self._expiry.pop(key, None)
            else:
                self._expiry[key] = time.monotonic() + ttl_seconds
            self._evict_overflow()

    def add(self, key: str, value: str) -> bool:
        with self._lock:
            self._purge_if_expired(key)
            if key in self._data:
                return False
            self._data[key] = value
            self._counters.add(key)
            self._evict_overflow()
            return True

    def incr(self, key: str) -> int:
        with self._lock:
            self._purge_if_expired(key)
            new_value = int(self._data.get(key, "0")) + 1
            self._data[key] = str(new_value)
            self._counters.add(key)
            self._evict_overflow()
            return new_value


class RedisCacheStore(CacheStore):
    """Cache store backed by a shared Redis server.

    Every redis.RedisError is translated into CacheUnavailableError so the
    hierarchy cache can degrade to computing values directly.
    """

    def __init__(self, client: redis.Redis) -> None:
        """Initialize with a Redis client.

        Args:
            client: A client created with decode_responses=True
        """
        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 5.0) -> RedisCacheStore:
        """Create a store connected to the Redis server at url."""
        client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        return cls(client)

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis GET failed for {key}") from e

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        try:
            self._client.set(key, value, ex=ttl_seconds)
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis SET failed for {key}") from e

    def add(self, key: str, value: str) -> bool:
        try:
            return bool(self._client.set(key, value, nx=True))
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis SET NX failed for {key}") from e

    def incr(self, key: str) -> int:
        try:
            return int(self._client.incr(key))
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis INCR failed for {key}") from e
