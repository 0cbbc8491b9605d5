"""Wiring of the hierarchy engine from settings and host collaborators.

The cache store is process-wide: every engine built in a process shares
one store, and with the redis backend every process shares one server.
Engines themselves are cheap and may be built per request around the
request's database session.
"""

from __future__ import annotations

from functools import lru_cache

from hierarchy.application.services import (
    ActivityScopeAggregator,
    GroupSettingsService,
    HierarchicalIdentifierBuilder,
    HierarchyEngine,
    PermissionConfig,
    PermissionResolver,
    TreeResolver,
)
from hierarchy.infrastructure.cache_stores import InMemoryCacheStore, RedisCacheStore
from hierarchy.infrastructure.hierarchy_cache import HierarchyCache
from hierarchy.ports.cache import CacheStore
from hierarchy.ports.collaborators import (
    AccessPolicy,
    GroupMetadataStore,
    GroupRoleProvider,
    GroupStore,
)
from infrastructure.settings import HierarchySettings, get_hierarchy_settings


def create_cache_store(settings: HierarchySettings) -> CacheStore:
    """Create the cache store selected by settings.

    Args:
        settings: Engine settings

    Returns:
        RedisCacheStore for the redis backend, InMemoryCacheStore otherwise
    """
    if settings.cache_backend == "redis":
        return RedisCacheStore.from_url(
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
        )
    return InMemoryCacheStore(max_entries=settings.cache_max_entries)


@lru_cache
def get_cache_store() -> CacheStore:
    """Get the process-wide cache store.

    Uses lru_cache to ensure the store is only created once.
    """
    return create_cache_store(get_hierarchy_settings())


def build_hierarchy_engine(
    groups: GroupStore,
    metadata: GroupMetadataStore,
    roles: GroupRoleProvider,
    access: AccessPolicy,
    settings: HierarchySettings | None = None,
    cache_store: CacheStore | None = None,
) -> HierarchyEngine:
    """Build a hierarchy engine around host collaborators.

    Args:
        groups: Read access to group records
        metadata: Per-group settings storage
        roles: Membership and role lookups
        access: Visibility rules and site-wide creation restriction
        settings: Engine settings (defaults to environment settings)
        cache_store: Cache store (defaults to the process-wide store)

    Returns:
        A fully wired HierarchyEngine
    """
    settings = settings or get_hierarchy_settings()
    cache = HierarchyCache(
        store=cache_store or get_cache_store(),
        key_prefix=settings.cache_key_prefix,
        ttl_seconds=settings.cache_ttl_seconds,
    )
    resolver = TreeResolver(
        groups=groups,
        access=access,
        cache=cache,
        max_depth=settings.max_depth,
    )
    permissions = PermissionResolver(
        groups=groups,
        metadata=metadata,
        roles=roles,
        access=access,
        config=PermissionConfig.from_settings(settings),
    )
    return HierarchyEngine(
        cache=cache,
        resolver=resolver,
        permissions=permissions,
        activity=ActivityScopeAggregator(resolver=resolver, metadata=metadata),
        identifiers=HierarchicalIdentifierBuilder(
            resolver=resolver,
            groups=groups,
            separator=settings.path_separator,
            directory_url=settings.groups_directory_url,
        ),
        settings=GroupSettingsService(metadata=metadata, permissions=permissions),
    )
