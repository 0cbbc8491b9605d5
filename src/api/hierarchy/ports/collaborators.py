"""Collaborator protocols (ports) for the hierarchy bounded context.

The host platform owns group storage, metadata storage, membership and
visibility rules. The engine only reads through these protocols, so any
storage backend (SQLAlchemy, an ORM of the host framework, an in-memory
fake in tests) can be plugged in.

Failures raised by implementations are not caught by the engine; an
unavailable group store propagates to the caller.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hierarchy.domain.value_objects import Group, HierarchyRelation


@runtime_checkable
class GroupStore(Protocol):
    """Read access to group records."""

    def get_group(self, group_id: int) -> Group | None:
        """Retrieve a group by its ID.

        Args:
            group_id: The unique identifier of the group

        Returns:
            The Group, or None if not found
        """
        ...

    def list_child_groups(self, parent_id: int) -> list[Group]:
        """List the direct children of a group.

        Args:
            parent_id: The parent group ID

        Returns:
            Child groups in the store's natural order (by ID for SQL stores)
        """
        ...

    def get_group_by_slug(
        self, slug: str, parent_id: int | None = None
    ) -> Group | None:
        """Retrieve a group by its slug.

        Slugs are unique among siblings only, so callers resolving a path
        pass the parent the slug must sit under.

        Args:
            slug: The group slug
            parent_id: Restrict the lookup to children of this parent
                (NO_PARENT for top-level groups), None to search all groups

        Returns:
            The Group, or None if no matching group uses the slug
        """
        ...


@runtime_checkable
class GroupMetadataStore(Protocol):
    """Per-group key-value settings."""

    def get_group_meta(self, group_id: int, key: str) -> str | None:
        """Read a metadata value, None when unset."""
        ...

    def set_group_meta(self, group_id: int, key: str, value: str) -> None:
        """Store a metadata value, replacing any previous one."""
        ...


@runtime_checkable
class GroupRoleProvider(Protocol):
    """Membership and role lookups."""

    def is_admin(self, user_id: int, group_id: int) -> bool:
        """Check if the user administers the group."""
        ...

    def is_mod(self, user_id: int, group_id: int) -> bool:
        """Check if the user moderates the group."""
        ...

    def is_member(self, user_id: int, group_id: int) -> bool:
        """Check if the user is a member of the group."""
        ...

    def is_site_admin(self, user_id: int) -> bool:
        """Check if the user administers the whole site."""
        ...


@runtime_checkable
class AccessPolicy(Protocol):
    """Visibility and site-wide creation rules of the host platform."""

    def viewer_can_access(
        self,
        viewer_id: int,
        group_id: int,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> bool:
        """Check if a viewer may see a group in the given context.

        Args:
            viewer_id: The viewing user, 0 for anonymous
            group_id: The group to check
            relation: The context of the hierarchy query

        Returns:
            True if the group should appear in the viewer's results
        """
        ...

    def group_creation_globally_restricted(self) -> bool:
        """Check if the site restricts group creation to administrators."""
        ...
