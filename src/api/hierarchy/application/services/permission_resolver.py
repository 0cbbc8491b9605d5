"""Permission resolver for hierarchy capabilities.

Answers two questions for the host's access-control boundary: may a user
create a subgroup under a given group, and may a user widen an activity
stream across the hierarchy. Both are read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hierarchy.application.observability import (
    DefaultPermissionProbe,
    PermissionProbe,
)
from hierarchy.domain.value_objects import (
    ActivityEnforcementPolicy,
    GroupMetaKey,
    SubgroupCreationPolicy,
)
from hierarchy.ports.collaborators import (
    AccessPolicy,
    GroupMetadataStore,
    GroupRoleProvider,
    GroupStore,
)

if TYPE_CHECKING:
    from infrastructure.settings import HierarchySettings


@dataclass(frozen=True)
class PermissionConfig:
    """Site-wide policy values the resolver is constructed with.

    Attributes:
        activity_enforcement: Who may widen activity streams
    """

    activity_enforcement: ActivityEnforcementPolicy = ActivityEnforcementPolicy.STRICT

    @classmethod
    def from_settings(cls, settings: HierarchySettings) -> PermissionConfig:
        """Build the config from engine settings."""
        return cls(
            activity_enforcement=ActivityEnforcementPolicy.parse(
                settings.activity_enforcement
            ),
        )


class PermissionResolver:
    """Resolves subgroup creation and activity aggregation permissions.

    Unset or unrecognized policy values resolve to their most restrictive
    meaning. Rights on a parent group never carry over to its children.
    """

    def __init__(
        self,
        groups: GroupStore,
        metadata: GroupMetadataStore,
        roles: GroupRoleProvider,
        access: AccessPolicy,
        config: PermissionConfig | None = None,
        probe: PermissionProbe | None = None,
    ):
        """Initialize PermissionResolver with dependencies.

        Args:
            groups: Read access to group records
            metadata: Per-group settings storage
            roles: Membership and role lookups
            access: Site-wide creation restriction
            config: Site-wide policy values (defaults to strict enforcement)
            probe: Optional domain probe for observability
        """
        self._groups = groups
        self._metadata = metadata
        self._roles = roles
        self._access = access
        self._config = config or PermissionConfig()
        self._probe = probe or DefaultPermissionProbe()

    @property
    def config(self) -> PermissionConfig:
        return self._config

    def subgroup_creation_policy(self, group_id: int) -> SubgroupCreationPolicy:
        """Read a group's subgroup creation policy, NOONE when unset."""
        raw = self._metadata.get_group_meta(group_id, GroupMetaKey.SUBGROUP_CREATORS)
        return SubgroupCreationPolicy.parse(raw)

    def can_create_subgroup(self, user_id: int, group_id: int) -> bool:
        """Check if a user may create a subgroup under a group.

        Rules, in order:
        1. If the site restricts group creation, only site admins pass
        2. An unknown parent group denies
        3. The group's own policy decides: admin, mod (or admin), member,
           and noone which leaves the decision to site admins

        Args:
            user_id: The user asking to create the subgroup
            group_id: The prospective parent group

        Returns:
            True if the subgroup may be created
        """
        if (
            self._access.group_creation_globally_restricted()
            and not self._roles.is_site_admin(user_id)
        ):
            self._probe.subgroup_creation_restricted(user_id, group_id)
            return False

        if not group_id or self._groups.get_group(group_id) is None:
            self._probe.subgroup_parent_not_found(user_id, group_id)
            return False

        policy = self.subgroup_creation_policy(group_id)
        match policy:
            case SubgroupCreationPolicy.ADMIN:
                allowed = self._roles.is_admin(user_id, group_id)
            case SubgroupCreationPolicy.MOD:
                allowed = self._roles.is_mod(user_id, group_id) or self._roles.is_admin(
                    user_id, group_id
                )
            case SubgroupCreationPolicy.MEMBER:
                allowed = self._roles.is_member(user_id, group_id)
            case _:
                allowed = self._roles.is_site_admin(user_id)

        self._probe.subgroup_creation_decided(user_id, group_id, policy.value, allowed)
        return allowed

    def can_include_aggregated_activity(
        self,
        user_id: int,
        group_id: int | None = None,
    ) -> bool:
        """Check if a user may widen an activity stream beyond its group.

        Args:
            user_id: The user the stream is built for
            group_id: The group whose stream is widened; needed for the
                group-admins policy

        Returns:
            True if aggregation across the hierarchy is permitted
        """
        enforcement = self._config.activity_enforcement
        match enforcement:
            case ActivityEnforcementPolicy.SITE_ADMINS:
                allowed = self._roles.is_site_admin(user_id)
            case ActivityEnforcementPolicy.GROUP_ADMINS:
                allowed = self._roles.is_site_admin(user_id) or bool(
                    group_id and self._roles.is_admin(user_id, group_id)
                )
            case _:
                allowed = False

        self._probe.activity_inclusion_decided(
            user_id, group_id, enforcement.value, allowed
        )
        return allowed
