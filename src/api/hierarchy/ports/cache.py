"""Cache store protocol (port) for the hierarchy cache.

The store is shared between all processes serving the host application,
so the cache generation token kept in it is globally visible. The
hierarchy cache built on top of it is what application services use.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from hierarchy.domain.cache_keys import HierarchyCacheKey
from hierarchy.domain.events import GroupEvent


@runtime_checkable
class CacheStore(Protocol):
    """String key-value store with an atomic counter.

    Implementations raise CacheUnavailableError when the backing service
    cannot be reached. Callers degrade to computing values directly.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        ...

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store a value, optionally expiring after ttl_seconds."""
        ...

    def add(self, key: str, value: str) -> bool:
        """Store a value only if the key is absent.

        Returns:
            True if the value was stored, False if the key already existed
        """
        ...

    def incr(self, key: str) -> int:
        """Atomically increment an integer value and return the new value."""
        ...


@runtime_checkable
class HierarchyCachePort(Protocol):
    """Cache of hierarchy derivations as seen by the application services.

    Implementations never raise on store problems; reads degrade to a miss
    and writes to a no-op.
    """

    def get(self, key: HierarchyCacheKey) -> Any | None:
        """Return the cached value, or None on a miss."""
        ...

    def put(self, key: HierarchyCacheKey, value: Any) -> None:
        """Store a derived value under the current generation."""
        ...

    def invalidate_all(self) -> None:
        """Make every cached value miss."""
        ...

    def handle(self, event: GroupEvent) -> None:
        """React to a group lifecycle event."""
        ...
