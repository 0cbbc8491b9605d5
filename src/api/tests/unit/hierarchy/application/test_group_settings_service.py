"""Unit tests for GroupSettingsService.

Saving a setting validates the submitted value before anything is
written, and activity aggregation changes are gated by the site-wide
enforcement policy.
"""

from unittest.mock import create_autospec

import pytest

from hierarchy.application.observability.group_settings_probe import GroupSettingsProbe
from hierarchy.application.services.group_settings_service import GroupSettingsService
from hierarchy.application.services.permission_resolver import (
    PermissionConfig,
    PermissionResolver,
)
from hierarchy.domain.value_objects import (
    ActivityAggregation,
    ActivityEnforcementPolicy,
    GroupMetaKey,
    SubgroupCreationPolicy,
)
from hierarchy.ports.exceptions import InvalidPolicyValueError, UnauthorizedError

SITE_ADMIN = 1
USER = 42


@pytest.fixture
def mock_probe():
    """Create mock group settings probe."""
    return create_autospec(GroupSettingsProbe, instance=True)


def make_service(platform, probe, enforcement=ActivityEnforcementPolicy.STRICT):
    permissions = PermissionResolver(
        platform,
        platform,
        platform,
        platform,
        config=PermissionConfig(activity_enforcement=enforcement),
    )
    return GroupSettingsService(metadata=platform, permissions=permissions, probe=probe)


@pytest.fixture
def service(animals_tree, mock_probe) -> GroupSettingsService:
    """Create GroupSettingsService with site-admins enforcement."""
    animals_tree.site_admins.add(SITE_ADMIN)
    return make_service(animals_tree, mock_probe, ActivityEnforcementPolicy.SITE_ADMINS)


class TestSubgroupCreationPolicy:
    """Tests for saving and reading the subgroup creation policy."""

    def test_stores_valid_policy(self, service, animals_tree, mock_probe):
        result = service.update_subgroup_creation_policy(2, "member")

        assert result == SubgroupCreationPolicy.MEMBER
        assert animals_tree.meta[(2, GroupMetaKey.SUBGROUP_CREATORS)] == "member"
        mock_probe.setting_updated.assert_called_once_with(
            2, GroupMetaKey.SUBGROUP_CREATORS, "member"
        )

    def test_read_back(self, service):
        service.update_subgroup_creation_policy(2, "admin")

        assert service.get_subgroup_creation_policy(2) == SubgroupCreationPolicy.ADMIN

    def test_invalid_policy_is_rejected_and_not_stored(
        self, service, animals_tree, mock_probe
    ):
        with pytest.raises(InvalidPolicyValueError, match="everyone"):
            service.update_subgroup_creation_policy(2, "everyone")

        assert (2, GroupMetaKey.SUBGROUP_CREATORS) not in animals_tree.meta
        mock_probe.setting_rejected.assert_called_once_with(
            2, GroupMetaKey.SUBGROUP_CREATORS, "everyone", "invalid_value"
        )

    def test_invalid_policy_keeps_previous_value(self, service, animals_tree):
        service.update_subgroup_creation_policy(2, "mod")

        with pytest.raises(InvalidPolicyValueError):
            service.update_subgroup_creation_policy(2, "")

        assert animals_tree.meta[(2, GroupMetaKey.SUBGROUP_CREATORS)] == "mod"

    def test_invalid_policy_is_a_value_error(self, service):
        with pytest.raises(ValueError):
            service.update_subgroup_creation_policy(2, "MOD ")


class TestActivityAggregation:
    """Tests for saving the activity aggregation setting."""

    def test_site_admin_may_change_setting(self, service, animals_tree):
        result = service.update_activity_aggregation(SITE_ADMIN, 2, "include-from-both")

        assert result == ActivityAggregation.INCLUDE_FROM_BOTH
        assert (
            animals_tree.meta[(2, GroupMetaKey.INCLUDE_ACTIVITY)] == "include-from-both"
        )

    def test_other_users_are_unauthorized(self, service, animals_tree, mock_probe):
        with pytest.raises(UnauthorizedError):
            service.update_activity_aggregation(USER, 2, "include-from-parents")

        assert (2, GroupMetaKey.INCLUDE_ACTIVITY) not in animals_tree.meta
        mock_probe.setting_rejected.assert_called_once_with(
            2, GroupMetaKey.INCLUDE_ACTIVITY, "include-from-parents", "unauthorized"
        )

    def test_strict_enforcement_blocks_everyone(self, animals_tree, mock_probe):
        animals_tree.site_admins.add(SITE_ADMIN)
        service = make_service(animals_tree, mock_probe)

        with pytest.raises(UnauthorizedError):
            service.update_activity_aggregation(SITE_ADMIN, 2, "include-from-parents")

    def test_group_admin_under_group_admins_policy(self, animals_tree, mock_probe):
        animals_tree.admins.add((USER, 2))
        service = make_service(
            animals_tree, mock_probe, ActivityEnforcementPolicy.GROUP_ADMINS
        )

        service.update_activity_aggregation(USER, 2, "include-from-children")

        with pytest.raises(UnauthorizedError):
            service.update_activity_aggregation(USER, 3, "include-from-children")

    def test_invalid_value_is_checked_before_permission(self, service):
        with pytest.raises(InvalidPolicyValueError):
            service.update_activity_aggregation(USER, 2, "include-from-cousins")
