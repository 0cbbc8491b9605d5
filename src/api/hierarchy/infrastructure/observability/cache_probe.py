"""Domain probes for hierarchy cache observability.

Captures hits, misses, generation changes and backend outages without
exposing logging details to the cache implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class HierarchyCacheProbe(Protocol):
    """Domain probe for the hierarchy cache."""

    def cache_hit(self, key: str) -> None:
        """Record that a derivation was served from the cache."""
        ...

    def cache_miss(self, key: str) -> None:
        """Record that a derivation had to be computed."""
        ...

    def generation_initialized(self, generation: int) -> None:
        """Record that the cache generation token was created."""
        ...

    def cache_invalidated(self, generation: int) -> None:
        """Record that the cache generation token advanced."""
        ...

    def cache_unavailable(self, operation: str, error: Exception) -> None:
        """Record that the cache store could not be reached."""
        ...

    def cache_entry_corrupt(self, key: str, error: Exception) -> None:
        """Record that a stored entry could not be decoded."""
        ...

    def with_context(self, context: ObservationContext) -> HierarchyCacheProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultHierarchyCacheProbe:
    """Default implementation of HierarchyCacheProbe using structlog.

    Hits and misses are frequent and logged at debug level only.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultHierarchyCacheProbe:
        """Create a new probe with observation context bound."""
        return DefaultHierarchyCacheProbe(logger=self._logger, context=context)

    def cache_hit(self, key: str) -> None:
        self._logger.debug(
            "hierarchy_cache_hit",
            key=key,
            **self._get_context_kwargs(),
        )

    def cache_miss(self, key: str) -> None:
        self._logger.debug(
            "hierarchy_cache_miss",
            key=key,
            **self._get_context_kwargs(),
        )

    def generation_initialized(self, generation: int) -> None:
        self._logger.info(
            "hierarchy_cache_generation_initialized",
            generation=generation,
            **self._get_context_kwargs(),
        )

    def cache_invalidated(self, generation: int) -> None:
        self._logger.info(
            "hierarchy_cache_invalidated",
            generation=generation,
            **self._get_context_kwargs(),
        )

    def cache_unavailable(self, operation: str, error: Exception) -> None:
        self._logger.warning(
            "hierarchy_cache_unavailable",
            operation=operation,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def cache_entry_corrupt(self, key: str, error: Exception) -> None:
        self._logger.warning(
            "hierarchy_cache_entry_corrupt",
            key=key,
            error=str(error),
            **self._get_context_kwargs(),
        )
