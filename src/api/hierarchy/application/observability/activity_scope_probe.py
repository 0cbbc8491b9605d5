"""Protocol for activity scope observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ActivityScopeProbe(Protocol):
    """Domain probe for activity stream scoping."""

    def activity_scope_widened(
        self,
        group_id: int,
        setting: str,
        group_count: int,
    ) -> None:
        """Record that a group's activity stream spans related groups."""
        ...

    def activity_scope_blocked(
        self,
        group_id: int,
        viewer_id: int,
    ) -> None:
        """Record that the enforcement policy kept a stream to a single group."""
        ...

    def with_context(self, context: ObservationContext) -> ActivityScopeProbe:
        """Return a new probe with additional context."""
        ...


class DefaultActivityScopeProbe:
    """Default implementation of ActivityScopeProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultActivityScopeProbe:
        """Create a new probe with observation context bound."""
        return DefaultActivityScopeProbe(logger=self._logger, context=context)

    def activity_scope_widened(
        self,
        group_id: int,
        setting: str,
        group_count: int,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"group_id", "setting", "group_count"}
        )
        self._logger.debug(
            "activity_scope_widened",
            group_id=group_id,
            setting=setting,
            group_count=group_count,
            **context_kwargs,
        )

    def activity_scope_blocked(
        self,
        group_id: int,
        viewer_id: int,
    ) -> None:
        context_kwargs = self._get_context_kwargs(exclude={"group_id", "viewer_id"})
        self._logger.debug(
            "activity_scope_blocked",
            group_id=group_id,
            viewer_id=viewer_id,
            **context_kwargs,
        )
