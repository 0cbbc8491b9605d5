"""Group lifecycle events consumed by the hierarchy engine.

The host platform raises these after a group record was successfully
created, edited or deleted. Any of them may change the shape of the
tree, so consumers treat them alike.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class GroupSaved:
    """Event raised when a group was created or edited.

    Attributes:
        group_id: The saved group
        occurred_at: When the event occurred (UTC)
    """

    group_id: int
    occurred_at: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class GroupDeleted:
    """Event raised when a group was deleted.

    Attributes:
        group_id: The deleted group
        occurred_at: When the event occurred (UTC)
    """

    group_id: int
    occurred_at: datetime = field(default_factory=_utc_now)


# Type alias for all group lifecycle events
GroupEvent = GroupSaved | GroupDeleted
