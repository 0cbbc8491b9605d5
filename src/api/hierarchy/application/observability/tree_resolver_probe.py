"""Protocol for tree resolver observability.

Defines the interface for domain probes that capture data-integrity
conditions met while walking the group hierarchy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TreeResolverProbe(Protocol):
    """Domain probe for hierarchy walks.

    Cycles and runaway depth indicate corrupt parent references in the
    group store. Walks survive them, but they must be visible to operators.
    """

    def cycle_detected(
        self,
        group_id: int,
        revisited_group_id: int,
        operation: str,
    ) -> None:
        """Record that a walk reached a group it had already visited."""
        ...

    def depth_limit_reached(
        self,
        group_id: int,
        max_depth: int,
        operation: str,
    ) -> None:
        """Record that a walk was cut off at the configured depth."""
        ...

    def parent_missing(
        self,
        group_id: int,
        parent_id: int,
    ) -> None:
        """Record that a group references a parent that does not exist."""
        ...

    def with_context(self, context: ObservationContext) -> TreeResolverProbe:
        """Return a new probe with additional context."""
        ...


class DefaultTreeResolverProbe:
    """Default implementation of TreeResolverProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context as kwargs dict, excluding specified keys.

        Args:
            exclude: Set of keys to exclude from context (avoids parameter collision)
        """
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultTreeResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTreeResolverProbe(logger=self._logger, context=context)

    def cycle_detected(
        self,
        group_id: int,
        revisited_group_id: int,
        operation: str,
    ) -> None:
        """Record that a walk reached a group it had already visited."""
        context_kwargs = self._get_context_kwargs(
            exclude={"group_id", "revisited_group_id", "operation"}
        )
        self._logger.warning(
            "hierarchy_cycle_detected",
            group_id=group_id,
            revisited_group_id=revisited_group_id,
            operation=operation,
            **context_kwargs,
        )

    def depth_limit_reached(
        self,
        group_id: int,
        max_depth: int,
        operation: str,
    ) -> None:
        """Record that a walk was cut off at the configured depth."""
        context_kwargs = self._get_context_kwargs(
            exclude={"group_id", "max_depth", "operation"}
        )
        self._logger.warning(
            "hierarchy_depth_limit_reached",
            group_id=group_id,
            max_depth=max_depth,
            operation=operation,
            **context_kwargs,
        )

    def parent_missing(
        self,
        group_id: int,
        parent_id: int,
    ) -> None:
        """Record that a group references a parent that does not exist."""
        context_kwargs = self._get_context_kwargs(exclude={"group_id", "parent_id"})
        self._logger.info(
            "hierarchy_parent_missing",
            group_id=group_id,
            parent_id=parent_id,
            **context_kwargs,
        )
