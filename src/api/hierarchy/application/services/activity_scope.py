"""Activity scope aggregation for group activity streams."""

from __future__ import annotations

from hierarchy.application.observability import (
    ActivityScopeProbe,
    DefaultActivityScopeProbe,
)
from hierarchy.application.services.tree_resolver import TreeResolver
from hierarchy.domain.value_objects import (
    ActivityAggregation,
    GroupMetaKey,
    HierarchyRelation,
)
from hierarchy.ports.collaborators import GroupMetadataStore


class ActivityScopeAggregator:
    """Computes which groups feed a group's activity stream.

    Does not decide whether the viewer may see a widened stream; callers
    apply PermissionResolver.can_include_aggregated_activity first.
    """

    def __init__(
        self,
        resolver: TreeResolver,
        metadata: GroupMetadataStore,
        probe: ActivityScopeProbe | None = None,
    ):
        self._resolver = resolver
        self._metadata = metadata
        self._probe = probe or DefaultActivityScopeProbe()

    def aggregation_setting(self, group_id: int) -> ActivityAggregation:
        """Read a group's aggregation setting, INCLUDE_FROM_NONE when unset."""
        raw = self._metadata.get_group_meta(group_id, GroupMetaKey.INCLUDE_ACTIVITY)
        return ActivityAggregation.parse(raw)

    def aggregation_scope(self, group_id: int, viewer_id: int) -> list[int] | None:
        """Get the ids of groups whose activity merges into a group's stream.

        Args:
            group_id: The group whose stream is being built
            viewer_id: The viewing user, 0 for anonymous

        Returns:
            The group id, then visible ancestors nearest first, then visible
            descendants in resolver order; None when the group does not
            aggregate and its stream stays as it is
        """
        setting = self.aggregation_setting(group_id)
        if not (setting.includes_parents or setting.includes_children):
            return None

        scope = [group_id]
        if setting.includes_parents:
            scope.extend(
                self._resolver.ancestors(group_id, viewer_id, HierarchyRelation.ACTIVITY)
            )
        if setting.includes_children:
            scope.extend(
                self._resolver.descendant_ids(
                    group_id, viewer_id, HierarchyRelation.ACTIVITY
                )
            )

        # dict preserves first-seen order
        scope = list(dict.fromkeys(scope))
        self._probe.activity_scope_widened(group_id, setting.value, len(scope))
        return scope
