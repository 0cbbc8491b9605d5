"""Hierarchy engine facade for the host application.

Bundles the hierarchy services behind the calls the host makes at its
boundaries: lifecycle notifications, capability checks, activity queries
and permalink construction.
"""

from __future__ import annotations

from hierarchy.application.observability import (
    ActivityScopeProbe,
    DefaultActivityScopeProbe,
)
from hierarchy.application.services.activity_scope import ActivityScopeAggregator
from hierarchy.application.services.group_settings_service import GroupSettingsService
from hierarchy.application.services.hierarchical_identifiers import (
    HierarchicalIdentifierBuilder,
)
from hierarchy.application.services.permission_resolver import PermissionResolver
from hierarchy.application.services.tree_resolver import TreeResolver
from hierarchy.domain.events import GroupDeleted, GroupEvent, GroupSaved
from hierarchy.domain.value_objects import (
    ANONYMOUS_VIEWER,
    Group,
    HierarchyRelation,
    ResolvedGroupPath,
)
from hierarchy.ports.cache import HierarchyCachePort


class HierarchyEngine:
    """Entry point of the hierarchy engine for a host application.

    The host calls on_group_saved/on_group_deleted after every successful
    group mutation; nothing else keeps the cache coherent.
    """

    def __init__(
        self,
        cache: HierarchyCachePort,
        resolver: TreeResolver,
        permissions: PermissionResolver,
        activity: ActivityScopeAggregator,
        identifiers: HierarchicalIdentifierBuilder,
        settings: GroupSettingsService,
        probe: ActivityScopeProbe | None = None,
    ):
        self.cache = cache
        self.resolver = resolver
        self.permissions = permissions
        self.activity = activity
        self.identifiers = identifiers
        self.settings = settings
        self._probe = probe or DefaultActivityScopeProbe()

    def publish(self, event: GroupEvent) -> None:
        """Deliver a group lifecycle event to the cache."""
        self.cache.handle(event)

    def on_group_saved(self, group_id: int) -> None:
        """Notify the engine that a group was created or edited."""
        self.publish(GroupSaved(group_id=group_id))

    def on_group_deleted(self, group_id: int) -> None:
        """Notify the engine that a group was deleted."""
        self.publish(GroupDeleted(group_id=group_id))

    def ancestors(
        self,
        group_id: int,
        viewer_id: int = ANONYMOUS_VIEWER,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> list[int]:
        return self.resolver.ancestors(group_id, viewer_id, relation)

    def descendants(
        self,
        group_id: int,
        viewer_id: int = ANONYMOUS_VIEWER,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> list[Group]:
        return self.resolver.descendants(group_id, viewer_id, relation)

    def has_children(self, group_id: int, viewer_id: int = ANONYMOUS_VIEWER) -> bool:
        return self.resolver.has_children(group_id, viewer_id)

    def can_create_subgroup(self, user_id: int, group_id: int) -> bool:
        return self.permissions.can_create_subgroup(user_id, group_id)

    def activity_scope_for_query(self, group_id: int, viewer_id: int) -> list[int] | None:
        """Get the group ids an activity query for a group should cover.

        Applies the site-wide enforcement gate before computing the scope.

        Returns:
            The widened list of group ids, or None to leave the query
            scoped to the single group
        """
        if not self.permissions.can_include_aggregated_activity(viewer_id, group_id):
            self._probe.activity_scope_blocked(group_id, viewer_id)
            return None
        return self.activity.aggregation_scope(group_id, viewer_id)

    def build_hierarchical_slug(self, group_id: int) -> str:
        return self.identifiers.build_hierarchical_slug(group_id)

    def build_permalink(self, group_id: int) -> str:
        return self.identifiers.build_permalink(group_id)

    def resolve_url(self, url_path: str) -> ResolvedGroupPath | None:
        return self.identifiers.resolve_url(url_path)
