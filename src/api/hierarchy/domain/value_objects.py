"""Value objects for the hierarchy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for groups, viewers and the policy settings that
govern subgroup creation and activity aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

# Viewer id used for hierarchy queries that must not depend on who is asking.
ANONYMOUS_VIEWER = 0

# Parent id stored for top-level groups.
NO_PARENT = 0


@dataclass(frozen=True)
class Group:
    """A group record as exposed by the host platform's storage layer.

    The engine never mutates groups. It only follows ``parent_id`` to
    derive ancestors and descendants, and reads ``slug`` to build paths.

    Attributes:
        id: Unique group identifier
        parent_id: Parent group identifier, 0 for top-level groups
        slug: URL slug, unique among the parent's children
        status: Opaque visibility level (e.g. "public", "private", "hidden")
    """

    id: int
    parent_id: int
    slug: str
    status: str = "public"

    def __post_init__(self) -> None:
        """Normalise a missing parent reference to NO_PARENT."""
        if self.parent_id is None:
            object.__setattr__(self, "parent_id", NO_PARENT)

    @property
    def is_top_level(self) -> bool:
        """Check if the group has no parent."""
        return self.parent_id == NO_PARENT

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible representation."""
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "slug": self.slug,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Group:
        """Rebuild a group from its to_dict() representation."""
        return cls(
            id=int(data["id"]),
            parent_id=int(data.get("parent_id") or NO_PARENT),
            slug=str(data["slug"]),
            status=str(data.get("status", "public")),
        )


class HierarchyRelation(StrEnum):
    """Context a hierarchy query is made for.

    Visibility rules can differ between contexts, so the relation is part
    of every cache key. ACTIVITY is used when widening activity streams.
    """

    DEFAULT = "default"
    ACTIVITY = "activity"


class GroupMetaKey(StrEnum):
    """Group metadata keys owned by the hierarchy engine."""

    SUBGROUP_CREATORS = "hgbp-allowed-subgroup-creators"
    INCLUDE_ACTIVITY = "hgbp-include-activity-from-relatives"


class SubgroupCreationPolicy(StrEnum):
    """Who may create subgroups under a specific group.

    Stored per group. Missing or unrecognized values fall back to NOONE,
    which only lets site administrators create subgroups.
    """

    NOONE = "noone"
    ADMIN = "admin"
    MOD = "mod"
    MEMBER = "member"

    @classmethod
    def parse(cls, raw: str | None) -> SubgroupCreationPolicy:
        """Parse a stored value, failing safe to NOONE."""
        try:
            return cls(raw)
        except ValueError:
            return cls.NOONE


class ActivityEnforcementPolicy(StrEnum):
    """Site-wide rule for who may widen activity streams across the hierarchy."""

    SITE_ADMINS = "site-admins"
    GROUP_ADMINS = "group-admins"
    STRICT = "strict"

    @classmethod
    def parse(cls, raw: str | None) -> ActivityEnforcementPolicy:
        """Parse a configured value, failing safe to STRICT."""
        try:
            return cls(raw)
        except ValueError:
            return cls.STRICT


class ActivityAggregation(StrEnum):
    """Per-group setting for merging related groups' activity."""

    INCLUDE_FROM_NONE = "include-from-none"
    INCLUDE_FROM_PARENTS = "include-from-parents"
    INCLUDE_FROM_CHILDREN = "include-from-children"
    INCLUDE_FROM_BOTH = "include-from-both"

    @classmethod
    def parse(cls, raw: str | None) -> ActivityAggregation:
        """Parse a stored value, failing safe to INCLUDE_FROM_NONE."""
        try:
            return cls(raw)
        except ValueError:
            return cls.INCLUDE_FROM_NONE

    @property
    def includes_parents(self) -> bool:
        return self in (
            ActivityAggregation.INCLUDE_FROM_PARENTS,
            ActivityAggregation.INCLUDE_FROM_BOTH,
        )

    @property
    def includes_children(self) -> bool:
        return self in (
            ActivityAggregation.INCLUDE_FROM_CHILDREN,
            ActivityAggregation.INCLUDE_FROM_BOTH,
        )


@dataclass(frozen=True)
class ResolvedGroupPath:
    """Result of resolving a hierarchical URL path.

    Attributes:
        group: The group named by the last slug in the leading run of slugs
        action_variables: Remaining path segments after the group slugs
    """

    group: Group
    action_variables: tuple[str, ...]
