"""Tree resolver for the group hierarchy.

Derives ancestors and descendants on demand by following parent
references through the group store. The parent reference is the single
source of truth; the hierarchy cache is the only materialization.
"""

from __future__ import annotations

from collections.abc import Iterator

from hierarchy.application.observability import (
    DefaultTreeResolverProbe,
    TreeResolverProbe,
)
from hierarchy.domain.cache_keys import CacheOperation, HierarchyCacheKey
from hierarchy.domain.value_objects import (
    ANONYMOUS_VIEWER,
    NO_PARENT,
    Group,
    HierarchyRelation,
)
from hierarchy.ports.cache import HierarchyCachePort
from hierarchy.ports.collaborators import AccessPolicy, GroupStore

DEFAULT_MAX_DEPTH = 100


class TreeResolver:
    """Resolves ancestors and descendants of groups for a viewer.

    Walk rules:
    - A missing group ends the walk as if the tree stopped there
    - A group reached twice within one walk ends that branch (cycle guard)
    - No walk goes deeper than max_depth levels
    - Groups the viewer cannot access are left out of results, but walks
      continue through them
    """

    def __init__(
        self,
        groups: GroupStore,
        access: AccessPolicy,
        cache: HierarchyCachePort,
        max_depth: int = DEFAULT_MAX_DEPTH,
        probe: TreeResolverProbe | None = None,
    ):
        """Initialize TreeResolver with dependencies.

        Args:
            groups: Read access to group records
            access: Visibility rules of the host platform
            cache: Hierarchy cache consulted before every walk
            max_depth: Upper bound on levels walked in either direction
            probe: Optional domain probe for observability
        """
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self._groups = groups
        self._access = access
        self._cache = cache
        self._max_depth = max_depth
        self._probe = probe or DefaultTreeResolverProbe()

    def _walk_up(self, group_id: int, operation: str) -> list[Group]:
        """Return the unfiltered parent chain, nearest parent first."""
        current = self._groups.get_group(group_id)
        if current is None:
            return []

        visited = {current.id}
        chain: list[Group] = []
        while current.parent_id != NO_PARENT:
            parent_id = current.parent_id
            if len(chain) >= self._max_depth:
                self._probe.depth_limit_reached(group_id, self._max_depth, operation)
                break
            if parent_id in visited:
                self._probe.cycle_detected(group_id, parent_id, operation)
                break
            parent = self._groups.get_group(parent_id)
            if parent is None:
                self._probe.parent_missing(current.id, parent_id)
                break
            visited.add(parent.id)
            chain.append(parent)
            current = parent
        return chain

    def _iter_descendants(self, group_id: int, operation: str) -> Iterator[Group]:
        """Yield every descendant once, depth-first in store order."""
        if self._groups.get_group(group_id) is None:
            return

        visited = {group_id}
        depth_limited = False
        stack = [(child, 1) for child in reversed(self._groups.list_child_groups(group_id))]
        while stack:
            group, depth = stack.pop()
            if group.id in visited:
                self._probe.cycle_detected(group_id, group.id, operation)
                continue
            visited.add(group.id)
            yield group

            if depth >= self._max_depth:
                if not depth_limited:
                    self._probe.depth_limit_reached(group_id, self._max_depth, operation)
                    depth_limited = True
                continue
            children = self._groups.list_child_groups(group.id)
            stack.extend((child, depth + 1) for child in reversed(children))

    def _can_access(self, viewer_id: int, group_id: int, relation: HierarchyRelation) -> bool:
        return self._access.viewer_can_access(viewer_id, group_id, relation)

    def ancestors(
        self,
        group_id: int,
        viewer_id: int = ANONYMOUS_VIEWER,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> list[int]:
        """Get the ids of a group's ancestors visible to a viewer.

        Args:
            group_id: The group to start from
            viewer_id: The viewing user, 0 for anonymous
            relation: The visibility context of the query

        Returns:
            Ancestor ids from the nearest parent up to the root; empty for
            top-level or unknown groups
        """
        key = HierarchyCacheKey(CacheOperation.ANCESTORS, group_id, viewer_id, relation)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = [
            ancestor.id
            for ancestor in self._walk_up(group_id, CacheOperation.ANCESTORS)
            if self._can_access(viewer_id, ancestor.id, relation)
        ]
        self._cache.put(key, result)
        return result

    def descendants(
        self,
        group_id: int,
        viewer_id: int = ANONYMOUS_VIEWER,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> list[Group]:
        """Get a group's descendants visible to a viewer.

        Each child is followed by its own descendants before its next
        sibling. The group itself is never included.

        Args:
            group_id: The group to start from
            viewer_id: The viewing user, 0 for anonymous
            relation: The visibility context of the query

        Returns:
            Descendant groups; empty for leaf or unknown groups
        """
        key = HierarchyCacheKey(CacheOperation.DESCENDANTS, group_id, viewer_id, relation)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = [
            group
            for group in self._iter_descendants(group_id, CacheOperation.DESCENDANTS)
            if self._can_access(viewer_id, group.id, relation)
        ]
        self._cache.put(key, result)
        return result

    def descendant_ids(
        self,
        group_id: int,
        viewer_id: int = ANONYMOUS_VIEWER,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> list[int]:
        """Get the ids of descendants(), in the same order."""
        return [group.id for group in self.descendants(group_id, viewer_id, relation)]

    def has_children(
        self,
        group_id: int,
        viewer_id: int = ANONYMOUS_VIEWER,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> bool:
        """Check if a group has at least one descendant visible to a viewer.

        Stops at the first visible descendant instead of materializing the
        whole subtree; directory listings call this once per row.
        """
        key = HierarchyCacheKey(CacheOperation.HAS_CHILDREN, group_id, viewer_id, relation)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = any(
            self._can_access(viewer_id, group.id, relation)
            for group in self._iter_descendants(group_id, CacheOperation.HAS_CHILDREN)
        )
        self._cache.put(key, result)
        return result

    def ancestor_path(self, group_id: int) -> list[Group]:
        """Get the full ancestor chain of a group, root first.

        Unlike ancestors(), no visibility filter applies: the chain
        describes where the group sits, not what anyone may see.
        """
        key = HierarchyCacheKey(CacheOperation.ANCESTOR_PATH, group_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = list(reversed(self._walk_up(group_id, CacheOperation.ANCESTOR_PATH)))
        self._cache.put(key, result)
        return result
