"""Infrastructure adapters for the hierarchy bounded context."""

from hierarchy.infrastructure.access_policy import StatusAccessPolicy
from hierarchy.infrastructure.cache_stores import InMemoryCacheStore, RedisCacheStore
from hierarchy.infrastructure.group_store import SqlGroupStore
from hierarchy.infrastructure.hierarchy_cache import HierarchyCache

__all__ = [
    "HierarchyCache",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "SqlGroupStore",
    "StatusAccessPolicy",
]
