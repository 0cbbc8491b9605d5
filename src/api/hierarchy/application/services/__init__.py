"""Application services for the hierarchy bounded context."""

from hierarchy.application.services.activity_scope import ActivityScopeAggregator
from hierarchy.application.services.group_settings_service import GroupSettingsService
from hierarchy.application.services.hierarchical_identifiers import (
    HierarchicalIdentifierBuilder,
)
from hierarchy.application.services.hierarchy_engine import HierarchyEngine
from hierarchy.application.services.permission_resolver import (
    PermissionConfig,
    PermissionResolver,
)
from hierarchy.application.services.tree_resolver import TreeResolver

__all__ = [
    "ActivityScopeAggregator",
    "GroupSettingsService",
    "HierarchicalIdentifierBuilder",
    "HierarchyEngine",
    "PermissionConfig",
    "PermissionResolver",
    "TreeResolver",
]
