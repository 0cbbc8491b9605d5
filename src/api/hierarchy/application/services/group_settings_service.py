"""Group settings service for per-group hierarchy policies.

Stored policy values are read leniently everywhere else; this service is
the write path and only ever stores values from the enumerated sets.
"""

from __future__ import annotations

from enum import StrEnum

from hierarchy.application.observability import (
    DefaultGroupSettingsProbe,
    GroupSettingsProbe,
)
from hierarchy.application.services.permission_resolver import PermissionResolver
from hierarchy.domain.value_objects import (
    ActivityAggregation,
    GroupMetaKey,
    SubgroupCreationPolicy,
)
from hierarchy.ports.collaborators import GroupMetadataStore
from hierarchy.ports.exceptions import InvalidPolicyValueError, UnauthorizedError


class GroupSettingsService:
    """Application service for saving a group's hierarchy settings."""

    def __init__(
        self,
        metadata: GroupMetadataStore,
        permissions: PermissionResolver,
        probe: GroupSettingsProbe | None = None,
    ):
        self._metadata = metadata
        self._permissions = permissions
        self._probe = probe or DefaultGroupSettingsProbe()

    def _validate(
        self,
        enum_type: type[StrEnum],
        group_id: int,
        key: GroupMetaKey,
        raw_value: str,
    ) -> StrEnum:
        try:
            return enum_type(raw_value)
        except ValueError as e:
            self._probe.setting_rejected(group_id, key, str(raw_value), "invalid_value")
            allowed = ", ".join(member.value for member in enum_type)
            raise InvalidPolicyValueError(
                f"Invalid value '{raw_value}' for {key}; expected one of: {allowed}"
            ) from e

    def get_subgroup_creation_policy(self, group_id: int) -> SubgroupCreationPolicy:
        """Read who may create subgroups under a group."""
        return self._permissions.subgroup_creation_policy(group_id)

    def update_subgroup_creation_policy(
        self,
        group_id: int,
        raw_value: str,
    ) -> SubgroupCreationPolicy:
        """Store who may create subgroups under a group.

        Called after the host has authorized editing the group itself.

        Args:
            group_id: The group being edited
            raw_value: Submitted policy value (noone, admin, mod, member)

        Returns:
            The stored policy

        Raises:
            InvalidPolicyValueError: If the value is not a known policy;
                nothing is stored in that case
        """
        policy = self._validate(
            SubgroupCreationPolicy, group_id, GroupMetaKey.SUBGROUP_CREATORS, raw_value
        )
        self._metadata.set_group_meta(group_id, GroupMetaKey.SUBGROUP_CREATORS, policy.value)
        self._probe.setting_updated(group_id, GroupMetaKey.SUBGROUP_CREATORS, policy.value)
        return policy

    def update_activity_aggregation(
        self,
        user_id: int,
        group_id: int,
        raw_value: str,
    ) -> ActivityAggregation:
        """Store which related groups feed a group's activity stream.

        Changing the setting is gated by the site-wide enforcement policy,
        so under strict enforcement no one can change it.

        Args:
            user_id: The user submitting the change
            group_id: The group being edited
            raw_value: Submitted setting value

        Returns:
            The stored setting

        Raises:
            InvalidPolicyValueError: If the value is not a known setting
            UnauthorizedError: If the user may not change aggregation
        """
        setting = self._validate(
            ActivityAggregation, group_id, GroupMetaKey.INCLUDE_ACTIVITY, raw_value
        )
        if not self._permissions.can_include_aggregated_activity(user_id, group_id):
            self._probe.setting_rejected(
                group_id, GroupMetaKey.INCLUDE_ACTIVITY, setting.value, "unauthorized"
            )
            raise UnauthorizedError(
                f"User {user_id} may not change activity aggregation of group {group_id}"
            )

        self._metadata.set_group_meta(group_id, GroupMetaKey.INCLUDE_ACTIVITY, setting.value)
        self._probe.setting_updated(group_id, GroupMetaKey.INCLUDE_ACTIVITY, setting.value)
        return setting
