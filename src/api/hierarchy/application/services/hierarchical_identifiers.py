"""Hierarchical slugs, permalinks and path resolution.

A child group's permalink spells out its ancestry, for example
``/groups/animals/pets/kittens/``. Permalinks must not depend on who is
looking, so paths are built from the unfiltered ancestor chain.
"""

from __future__ import annotations

from collections.abc import Sequence

from hierarchy.application.services.tree_resolver import TreeResolver
from hierarchy.domain.value_objects import NO_PARENT, ResolvedGroupPath
from hierarchy.ports.collaborators import GroupStore


class HierarchicalIdentifierBuilder:
    """Builds and resolves slug paths from the group tree."""

    def __init__(
        self,
        resolver: TreeResolver,
        groups: GroupStore,
        separator: str = "/",
        directory_url: str = "/groups/",
    ):
        """Initialize the builder.

        Args:
            resolver: Tree resolver providing ancestor chains
            groups: Read access to group records
            separator: Separator between slugs
            directory_url: Base URL of the groups directory
        """
        if not separator:
            raise ValueError("separator cannot be empty")
        self._resolver = resolver
        self._groups = groups
        self._separator = separator
        self._directory_url = directory_url.rstrip("/") + "/"

    def build_hierarchical_slug(self, group_id: int) -> str:
        """Compose a group's slug path, root first.

        Private ancestors are included; building a path is not a
        permission check.

        Args:
            group_id: The group to build the path for

        Returns:
            Slugs of the ancestors and the group joined by the separator,
            or an empty string for an unknown group
        """
        group = self._groups.get_group(group_id)
        if group is None:
            return ""

        slugs = [ancestor.slug for ancestor in self._resolver.ancestor_path(group_id)]
        slugs.append(group.slug)
        return self._separator.join(slugs)

    def build_permalink(self, group_id: int) -> str:
        """Build a group's directory permalink with a trailing slash.

        Returns:
            The permalink, or an empty string for an unknown group
        """
        path = self.build_hierarchical_slug(group_id)
        if not path:
            return ""
        return f"{self._directory_url}{path}/"

    def resolve_path(self, segments: Sequence[str]) -> ResolvedGroupPath | None:
        """Resolve URL segments below the groups directory to a group.

        The first segment names a top-level group by slug, since a
        permalink always starts at the root of its chain. Each following segment
        that is the slug of a child of the group found so far descends one
        level; the first segment that is not ends the group part, and it
        and everything after it are returned as action variables.

        Args:
            segments: Path segments, e.g. ["animals", "pets", "kittens", "members"]

        Returns:
            The resolved group and remaining action variables, or None if
            the first segment is not the slug of a top-level group
        """
        parts = [segment for segment in segments if segment]
        if not parts:
            return None

        group = self._groups.get_group_by_slug(parts[0], parent_id=NO_PARENT)
        if group is None:
            return None

        index = 1
        while index < len(parts):
            children = {
                child.slug: child for child in self._groups.list_child_groups(group.id)
            }
            child = children.get(parts[index])
            if child is None:
                break
            group = child
            index += 1

        return ResolvedGroupPath(group=group, action_variables=tuple(parts[index:]))

    def resolve_url(self, url_path: str) -> ResolvedGroupPath | None:
        """Resolve a full URL path that starts with the groups directory.

        Returns:
            The resolved path, or None if the URL is outside the directory
            or names no group
        """
        if not url_path.rstrip("/").startswith(self._directory_url.rstrip("/")):
            return None
        remainder = url_path[len(self._directory_url.rstrip("/")) :]
        if remainder and not remainder.startswith("/"):
            return None
        return self.resolve_path(remainder.split("/"))
