"""Protocol for group settings service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupSettingsProbe(Protocol):
    """Domain probe for changes to per-group hierarchy settings."""

    def setting_updated(
        self,
        group_id: int,
        key: str,
        value: str,
    ) -> None:
        """Record that a hierarchy setting was stored."""
        ...

    def setting_rejected(
        self,
        group_id: int,
        key: str,
        value: str,
        reason: str,
    ) -> None:
        """Record that a hierarchy setting change was refused."""
        ...

    def with_context(self, context: ObservationContext) -> GroupSettingsProbe:
        """Return a new probe with additional context."""
        ...


class DefaultGroupSettingsProbe:
    """Default implementation of GroupSettingsProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupSettingsProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupSettingsProbe(logger=self._logger, context=context)

    def setting_updated(
        self,
        group_id: int,
        key: str,
        value: str,
    ) -> None:
        """Record that a hierarchy setting was stored."""
        context_kwargs = self._get_context_kwargs(exclude={"group_id", "key", "value"})
        self._logger.info(
            "group_hierarchy_setting_updated",
            group_id=group_id,
            key=key,
            value=value,
            **context_kwargs,
        )

    def setting_rejected(
        self,
        group_id: int,
        key: str,
        value: str,
        reason: str,
    ) -> None:
        """Record that a hierarchy setting change was refused."""
        context_kwargs = self._get_context_kwargs(
            exclude={"group_id", "key", "value", "reason"}
        )
        self._logger.warning(
            "group_hierarchy_setting_rejected",
            group_id=group_id,
            key=key,
            value=value,
            reason=reason,
            **context_kwargs,
        )
