"""Request metadata attached to hierarchy instrumentation events.

Probes merge the context into every event they emit, and the host can
bind it to structlog's context variables for the whole request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Metadata of the host request an engine call runs in.

    Lets cache misses, cycle warnings and permission denials be traced
    back to the request that caused them.

    Attributes:
        request_id: Identifier the host assigned to the request.
        user_id: The user the request runs for, if known.
        group_id: The group the request is about, if any.
        extra: Further host-specific fields.

    Example:
        context = ObservationContext(request_id="req-123", user_id=42)
        probe = DefaultTreeResolverProbe().with_context(context)
    """

    request_id: str | None = None
    user_id: int | None = None
    group_id: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Return the fields that are set, with extra merged in."""
        fields = {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "group_id": self.group_id,
        }
        result = {name: value for name, value in fields.items() if value is not None}
        result.update(self.extra)
        return result
