"""Unit tests for the hierarchy application probes.

Each default probe must emit one structlog event per call at the level
operators rely on, carrying the domain arguments and any bound context.
"""

from unittest.mock import MagicMock

import structlog

from hierarchy.application.observability import (
    DefaultActivityScopeProbe,
    DefaultGroupSettingsProbe,
    DefaultPermissionProbe,
    DefaultTreeResolverProbe,
)
from shared_kernel.observability_context import ObservationContext


class TestDefaultProbeInit:
    """Tests for probe construction."""

    def test_creates_with_default_logger(self):
        """Should create default logger when none provided."""
        probe = DefaultTreeResolverProbe()

        assert probe._logger is not None

    def test_creates_with_custom_logger(self):
        """Should use provided logger."""
        custom_logger = structlog.get_logger()
        probe = DefaultPermissionProbe(logger=custom_logger)

        assert probe._logger is custom_logger

    def test_with_context_keeps_logger(self):
        """with_context should return a new probe sharing the logger."""
        logger = MagicMock()
        probe = DefaultActivityScopeProbe(logger=logger)
        context = ObservationContext(request_id="req-1")

        bound = probe.with_context(context)

        assert bound is not probe
        assert bound._logger is logger
        assert bound._context is context


class TestTreeResolverProbe:
    """Tests for DefaultTreeResolverProbe."""

    def test_cycle_detected_logs_warning(self):
        logger = MagicMock()
        probe = DefaultTreeResolverProbe(logger=logger)

        probe.cycle_detected(1, 2, "ancestors")

        logger.warning.assert_called_once_with(
            "hierarchy_cycle_detected",
            group_id=1,
            revisited_group_id=2,
            operation="ancestors",
        )

    def test_depth_limit_reached_logs_warning(self):
        logger = MagicMock()
        probe = DefaultTreeResolverProbe(logger=logger)

        probe.depth_limit_reached(1, 100, "descendants")

        logger.warning.assert_called_once_with(
            "hierarchy_depth_limit_reached",
            group_id=1,
            max_depth=100,
            operation="descendants",
        )

    def test_parent_missing_logs_info(self):
        logger = MagicMock()
        probe = DefaultTreeResolverProbe(logger=logger)

        probe.parent_missing(3, 404)

        logger.info.assert_called_once_with(
            "hierarchy_parent_missing", group_id=3, parent_id=404
        )

    def test_includes_context(self):
        logger = MagicMock()
        context = ObservationContext(request_id="req-123", user_id=42)
        probe = DefaultTreeResolverProbe(logger=logger, context=context)

        probe.parent_missing(3, 404)

        call_kwargs = logger.info.call_args.kwargs
        assert call_kwargs["request_id"] == "req-123"
        assert call_kwargs["user_id"] == 42

    def test_argument_wins_over_context(self):
        """A context group_id must not collide with the group_id argument."""
        logger = MagicMock()
        context = ObservationContext(group_id=99)
        probe = DefaultTreeResolverProbe(logger=logger, context=context)

        probe.parent_missing(3, 404)

        assert logger.info.call_args.kwargs["group_id"] == 3


class TestPermissionProbe:
    """Tests for DefaultPermissionProbe."""

    def test_allowed_creation_logs_debug(self):
        logger = MagicMock()
        probe = DefaultPermissionProbe(logger=logger)

        probe.subgroup_creation_decided(42, 2, "member", True)

        logger.debug.assert_called_once_with(
            "subgroup_creation_allowed", user_id=42, group_id=2, policy="member"
        )
        logger.info.assert_not_called()

    def test_denied_creation_logs_info(self):
        logger = MagicMock()
        probe = DefaultPermissionProbe(logger=logger)

        probe.subgroup_creation_decided(42, 2, "admin", False)

        logger.info.assert_called_once_with(
            "subgroup_creation_denied", user_id=42, group_id=2, policy="admin"
        )

    def test_restricted_logs_info(self):
        logger = MagicMock()
        probe = DefaultPermissionProbe(logger=logger)

        probe.subgroup_creation_restricted(42, 2)

        logger.info.assert_called_once_with(
            "subgroup_creation_restricted", user_id=42, group_id=2
        )

    def test_parent_not_found_logs_info(self):
        logger = MagicMock()
        probe = DefaultPermissionProbe(logger=logger)

        probe.subgroup_parent_not_found(42, 999)

        logger.info.assert_called_once_with(
            "subgroup_parent_not_found", user_id=42, group_id=999
        )

    def test_activity_inclusion_denied_logs_info(self):
        logger = MagicMock()
        probe = DefaultPermissionProbe(logger=logger)

        probe.activity_inclusion_decided(42, 2, "strict", False)

        logger.info.assert_called_once_with(
            "activity_inclusion_denied", user_id=42, group_id=2, enforcement="strict"
        )

    def test_activity_inclusion_allowed_logs_debug(self):
        logger = MagicMock()
        probe = DefaultPermissionProbe(logger=logger)

        probe.activity_inclusion_decided(1, None, "site-admins", True)

        logger.debug.assert_called_once_with(
            "activity_inclusion_allowed",
            user_id=1,
            group_id=None,
            enforcement="site-admins",
        )


class TestActivityScopeProbe:
    """Tests for DefaultActivityScopeProbe."""

    def test_scope_widened_logs_debug(self):
        logger = MagicMock()
        probe = DefaultActivityScopeProbe(logger=logger)

        probe.activity_scope_widened(3, "include-from-parents", 3)

        logger.debug.assert_called_once_with(
            "activity_scope_widened",
            group_id=3,
            setting="include-from-parents",
            group_count=3,
        )

    def test_scope_blocked_logs_debug(self):
        logger = MagicMock()
        probe = DefaultActivityScopeProbe(logger=logger)

        probe.activity_scope_blocked(3, 7)

        logger.debug.assert_called_once_with(
            "activity_scope_blocked", group_id=3, viewer_id=7
        )


class TestGroupSettingsProbe:
    """Tests for DefaultGroupSettingsProbe."""

    def test_setting_updated_logs_info(self):
        logger = MagicMock()
        probe = DefaultGroupSettingsProbe(logger=logger)

        probe.setting_updated(2, "hgbp-allowed-subgroup-creators", "mod")

        logger.info.assert_called_once_with(
            "group_hierarchy_setting_updated",
            group_id=2,
            key="hgbp-allowed-subgroup-creators",
            value="mod",
        )

    def test_setting_rejected_logs_warning(self):
        logger = MagicMock()
        probe = DefaultGroupSettingsProbe(logger=logger)

        probe.setting_rejected(2, "hgbp-allowed-subgroup-creators", "x", "invalid_value")

        logger.warning.assert_called_once_with(
            "group_hierarchy_setting_rejected",
            group_id=2,
            key="hgbp-allowed-subgroup-creators",
            value="x",
            reason="invalid_value",
        )
