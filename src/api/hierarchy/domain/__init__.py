"""Domain layer for the group hierarchy bounded context.

Contains the value objects, cache keys and lifecycle events that the
tree, permission and identifier services operate on.
"""

from hierarchy.domain.cache_keys import CacheOperation, HierarchyCacheKey
from hierarchy.domain.events import GroupDeleted, GroupEvent, GroupSaved
from hierarchy.domain.value_objects import (
    ANONYMOUS_VIEWER,
    NO_PARENT,
    ActivityAggregation,
    ActivityEnforcementPolicy,
    Group,
    GroupMetaKey,
    HierarchyRelation,
    ResolvedGroupPath,
    SubgroupCreationPolicy,
)

__all__ = [
    "ANONYMOUS_VIEWER",
    "NO_PARENT",
    "ActivityAggregation",
    "ActivityEnforcementPolicy",
    "CacheOperation",
    "Group",
    "GroupDeleted",
    "GroupEvent",
    "GroupMetaKey",
    "GroupSaved",
    "HierarchyCacheKey",
    "HierarchyRelation",
    "ResolvedGroupPath",
    "SubgroupCreationPolicy",
]
