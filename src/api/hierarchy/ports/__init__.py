"""Ports for the hierarchy bounded context."""

from hierarchy.ports.cache import CacheStore, HierarchyCachePort
from hierarchy.ports.collaborators import (
    AccessPolicy,
    GroupMetadataStore,
    GroupRoleProvider,
    GroupStore,
)
from hierarchy.ports.exceptions import (
    CacheUnavailableError,
    InvalidPolicyValueError,
    UnauthorizedError,
)

__all__ = [
    "AccessPolicy",
    "CacheStore",
    "CacheUnavailableError",
    "GroupMetadataStore",
    "GroupRoleProvider",
    "GroupStore",
    "HierarchyCachePort",
    "InvalidPolicyValueError",
    "UnauthorizedError",
]
