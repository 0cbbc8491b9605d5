"""Versioned cache for derived hierarchy data.

Ancestor lists, descendant lists and existence checks are pure functions
of the group tree. Rather than tracking which entries a mutation affects,
every entry key embeds a generation token kept in the shared store, and
any group save or delete advances that token. Entries of older
generations are never deleted by the cache; they stop being read and are
left to the store's expiry or eviction.

The cache is an optimization only. A store outage degrades every lookup
to a miss and every write to a no-op.
"""

from __future__ import annotations

import time
from typing import Any

from hierarchy.domain.cache_keys import HierarchyCacheKey
from hierarchy.domain.events import GroupEvent
from hierarchy.infrastructure.cache_serialization import decode_value, encode_value
from hierarchy.infrastructure.observability import (
    DefaultHierarchyCacheProbe,
    HierarchyCacheProbe,
)
from hierarchy.ports.cache import CacheStore
from hierarchy.ports.exceptions import CacheUnavailableError


class HierarchyCache:
    """Generation-tagged cache of hierarchy derivations."""

    def __init__(
        self,
        store: CacheStore,
        key_prefix: str = "hgbp",
        ttl_seconds: int | None = None,
        probe: HierarchyCacheProbe | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            store: Shared cache store holding entries and the generation token
            key_prefix: Namespace of every key written to the store
            ttl_seconds: Optional expiry of entries, None keeps them
            probe: Optional domain probe for observability
        """
        self._store = store
        self._prefix = key_prefix
        self._ttl_seconds = ttl_seconds
        self._probe = probe or DefaultHierarchyCacheProbe()

    @property
    def generation_key(self) -> str:
        return f"{self._prefix}:generation"

    def _initial_generation(self) -> int:
        # A token lost to eviction restarts above every generation used before.
        return int(time.time() * 1000)

    def _current_generation(self) -> int:
        """Read the generation token, creating it on first use.

        A token that is not an integer is replaced, which also makes every
        existing entry miss.

        Raises:
            CacheUnavailableError: If the store cannot be reached
        """
        raw = self._store.get(self.generation_key)
        if raw is None:
            initial = self._initial_generation()
            if self._store.add(self.generation_key, str(initial)):
                self._probe.generation_initialized(initial)
                return initial
            # Another process created it first.
            raw = self._store.get(self.generation_key)
            if raw is None:
                return initial
        try:
            return int(raw)
        except ValueError as e:
            self._probe.cache_entry_corrupt(self.generation_key, e)
            return self._reset_generation()

    def _reset_generation(self) -> int:
        """Replace an unreadable generation token with a fresh one."""
        initial = self._initial_generation()
        self._store.set(self.generation_key, str(initial))
        self._probe.generation_initialized(initial)
        return initial

    def _entry_key(self, generation: int, key: HierarchyCacheKey) -> str:
        return f"{self._prefix}:{generation}:{key.as_string()}"

    def generation(self) -> int | None:
        """Return the current generation, or None if the store is unavailable."""
        try:
            return self._current_generation()
        except CacheUnavailableError as e:
            self._probe.cache_unavailable("generation", e)
            return None

    def get(self, key: HierarchyCacheKey) -> Any | None:
        """Look up a derivation under the current generation.

        Returns:
            The decoded value, or None on a miss, a corrupt entry or an
            unavailable store
        """
        try:
            entry_key = self._entry_key(self._current_generation(), key)
            raw = self._store.get(entry_key)
        except CacheUnavailableError as e:
            self._probe.cache_unavailable("get", e)
            return None

        if raw is None:
            self._probe.cache_miss(entry_key)
            return None

        try:
            value = decode_value(key.operation, raw)
        except ValueError as e:
            self._probe.cache_entry_corrupt(entry_key, e)
            return None

        self._probe.cache_hit(entry_key)
        return value

    def put(self, key: HierarchyCacheKey, value: Any) -> None:
        """Store a derivation under the current generation.

        Concurrent writers of the same key race harmlessly; all of them
        computed the value from the same tree.
        """
        try:
            entry_key = self._entry_key(self._current_generation(), key)
            self._store.set(
                entry_key,
                encode_value(key.operation, value),
                ttl_seconds=self._ttl_seconds,
            )
        except CacheUnavailableError as e:
            self._probe.cache_unavailable("put", e)

    def invalidate_all(self) -> None:
        """Advance the generation token so every existing entry misses."""
        try:
            self._current_generation()
            generation = self._store.incr(self.generation_key)
        except CacheUnavailableError as e:
            self._probe.cache_unavailable("invalidate_all", e)
            return
        self._probe.cache_invalidated(generation)

    def handle(self, event: GroupEvent) -> None:
        """Invalidate on a group lifecycle event.

        Any save or delete may move a subtree, so the whole cache goes.
        """
        self.invalidate_all()
