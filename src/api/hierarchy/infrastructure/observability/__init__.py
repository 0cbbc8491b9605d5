"""Observability probes for hierarchy infrastructure adapters."""

from hierarchy.infrastructure.observability.cache_probe import (
    DefaultHierarchyCacheProbe,
    HierarchyCacheProbe,
)

__all__ = [
    "DefaultHierarchyCacheProbe",
    "HierarchyCacheProbe",
]
