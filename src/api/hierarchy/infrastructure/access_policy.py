"""Status-based access policy for hosts without their own visibility rules.

Mirrors the usual three group statuses of social platforms:
- public: visible everywhere
- private: listed in directories, but activity only for members
- hidden: visible only to members

Site administrators see everything.
"""

from __future__ import annotations

from hierarchy.domain.value_objects import ANONYMOUS_VIEWER, HierarchyRelation
from hierarchy.ports.collaborators import AccessPolicy, GroupRoleProvider, GroupStore

PUBLIC_STATUS = "public"
PRIVATE_STATUS = "private"


class StatusAccessPolicy(AccessPolicy):
    """AccessPolicy deciding visibility from group status and membership."""

    def __init__(
        self,
        groups: GroupStore,
        roles: GroupRoleProvider,
        restrict_group_creation: bool = False,
    ) -> None:
        """Initialize the policy.

        Args:
            groups: Read access to group records
            roles: Membership and role lookups
            restrict_group_creation: Whether only site admins may create groups
        """
        self._groups = groups
        self._roles = roles
        self._restrict_group_creation = restrict_group_creation

    def viewer_can_access(
        self,
        viewer_id: int,
        group_id: int,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> bool:
        group = self._groups.get_group(group_id)
        if group is None:
            return False
        if group.status == PUBLIC_STATUS:
            return True
        if group.status == PRIVATE_STATUS and relation == HierarchyRelation.DEFAULT:
            return True
        if viewer_id == ANONYMOUS_VIEWER:
            return False
        return self._roles.is_site_admin(viewer_id) or self._roles.is_member(
            viewer_id, group_id
        )

    def group_creation_globally_restricted(self) -> bool:
        return self._restrict_group_creation
