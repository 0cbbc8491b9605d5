"""Protocol for permission resolver observability.

Defines the interface for domain probes that capture authorization
decisions about subgroup creation and activity aggregation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PermissionProbe(Protocol):
    """Domain probe for hierarchy permission decisions."""

    def subgroup_creation_decided(
        self,
        user_id: int,
        group_id: int,
        policy: str,
        allowed: bool,
    ) -> None:
        """Record the outcome of a subgroup creation check."""
        ...

    def subgroup_creation_restricted(
        self,
        user_id: int,
        group_id: int,
    ) -> None:
        """Record a denial caused by the site-wide creation restriction."""
        ...

    def subgroup_parent_not_found(
        self,
        user_id: int,
        group_id: int,
    ) -> None:
        """Record a denial because the prospective parent does not exist."""
        ...

    def activity_inclusion_decided(
        self,
        user_id: int,
        group_id: int | None,
        enforcement: str,
        allowed: bool,
    ) -> None:
        """Record the outcome of an activity aggregation check."""
        ...

    def with_context(self, context: ObservationContext) -> PermissionProbe:
        """Return a new probe with additional context."""
        ...


class DefaultPermissionProbe:
    """Default implementation of PermissionProbe using structlog.

    Grants are logged at debug level, denials at info level.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultPermissionProbe:
        """Create a new probe with observation context bound."""
        return DefaultPermissionProbe(logger=self._logger, context=context)

    def subgroup_creation_decided(
        self,
        user_id: int,
        group_id: int,
        policy: str,
        allowed: bool,
    ) -> None:
        """Record the outcome of a subgroup creation check."""
        context_kwargs = self._get_context_kwargs(
            exclude={"user_id", "group_id", "policy", "allowed"}
        )
        log = self._logger.debug if allowed else self._logger.info
        log(
            "subgroup_creation_allowed" if allowed else "subgroup_creation_denied",
            user_id=user_id,
            group_id=group_id,
            policy=policy,
            **context_kwargs,
        )

    def subgroup_creation_restricted(
        self,
        user_id: int,
        group_id: int,
    ) -> None:
        """Record a denial caused by the site-wide creation restriction."""
        context_kwargs = self._get_context_kwargs(exclude={"user_id", "group_id"})
        self._logger.info(
            "subgroup_creation_restricted",
            user_id=user_id,
            group_id=group_id,
            **context_kwargs,
        )

    def subgroup_parent_not_found(
        self,
        user_id: int,
        group_id: int,
    ) -> None:
        """Record a denial because the prospective parent does not exist."""
        context_kwargs = self._get_context_kwargs(exclude={"user_id", "group_id"})
        self._logger.info(
            "subgroup_parent_not_found",
            user_id=user_id,
            group_id=group_id,
            **context_kwargs,
        )

    def activity_inclusion_decided(
        self,
        user_id: int,
        group_id: int | None,
        enforcement: str,
        allowed: bool,
    ) -> None:
        """Record the outcome of an activity aggregation check."""
        context_kwargs = self._get_context_kwargs(
            exclude={"user_id", "group_id", "enforcement", "allowed"}
        )
        log = self._logger.debug if allowed else self._logger.info
        log(
            "activity_inclusion_allowed" if allowed else "activity_inclusion_denied",
            user_id=user_id,
            group_id=group_id,
            enforcement=enforcement,
            **context_kwargs,
        )
