"""Cache keys for derived hierarchy data.

A key identifies one derivation (ancestors, descendants, ...) of one group
for one viewer in one relation context. The cache generation is not part
of the key; the cache prepends it when talking to the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from hierarchy.domain.value_objects import ANONYMOUS_VIEWER, HierarchyRelation


class CacheOperation(StrEnum):
    """Kinds of derived hierarchy data held in the cache."""

    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
    HAS_CHILDREN = "has-children"
    ANCESTOR_PATH = "ancestor-path"


@dataclass(frozen=True)
class HierarchyCacheKey:
    """Identifier of a cached hierarchy derivation.

    Attributes:
        operation: What was derived
        group_id: The group the derivation starts from
        viewer_id: The viewer the result was filtered for
        relation: The visibility context of the query
    """

    operation: CacheOperation
    group_id: int
    viewer_id: int = ANONYMOUS_VIEWER
    relation: HierarchyRelation = HierarchyRelation.DEFAULT

    def as_string(self) -> str:
        """Render the key for a string-keyed cache store.

        Example:
            >>> HierarchyCacheKey(CacheOperation.ANCESTORS, 7, 3).as_string()
            'ancestors:7:3:default'
        """
        return f"{self.operation}:{self.group_id}:{self.viewer_id}:{self.relation}"
