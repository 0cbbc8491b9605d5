"""Domain-Oriented Observability for the hierarchy application layer.

Probes for tree walks, permission decisions, activity scoping and
settings changes following Domain-Oriented Observability patterns.
"""

from hierarchy.application.observability.activity_scope_probe import (
    ActivityScopeProbe,
    DefaultActivityScopeProbe,
)
from hierarchy.application.observability.group_settings_probe import (
    DefaultGroupSettingsProbe,
    GroupSettingsProbe,
)
from hierarchy.application.observability.permission_probe import (
    DefaultPermissionProbe,
    PermissionProbe,
)
from hierarchy.application.observability.tree_resolver_probe import (
    DefaultTreeResolverProbe,
    TreeResolverProbe,
)

__all__ = [
    "ActivityScopeProbe",
    "DefaultActivityScopeProbe",
    "GroupSettingsProbe",
    "DefaultGroupSettingsProbe",
    "PermissionProbe",
    "DefaultPermissionProbe",
    "TreeResolverProbe",
    "DefaultTreeResolverProbe",
]
