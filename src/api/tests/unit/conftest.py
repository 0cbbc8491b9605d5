"""Unit test fixtures with in-memory collaborators."""

from __future__ import annotations

from collections import defaultdict

import pytest

from hierarchy.domain.value_objects import NO_PARENT, Group, HierarchyRelation
from hierarchy.infrastructure.cache_stores import InMemoryCacheStore
from hierarchy.infrastructure.hierarchy_cache import HierarchyCache
from infrastructure.settings import HierarchySettings


class FakeGroupPlatform:
    """In-memory stand-in for the host platform's collaborators.

    Implements GroupStore, GroupMetadataStore, GroupRoleProvider and
    AccessPolicy. Visibility is explicit: groups listed in ``hidden_from``
    are inaccessible to the given viewers, and ``activity_hidden_from``
    does the same for the activity relation only.
    """

    def __init__(self) -> None:
        self.groups: dict[int, Group] = {}
        self.meta: dict[tuple[int, str], str] = {}
        self.admins: set[tuple[int, int]] = set()
        self.mods: set[tuple[int, int]] = set()
        self.members: set[tuple[int, int]] = set()
        self.site_admins: set[int] = set()
        self.hidden_from: dict[int, set[int]] = defaultdict(set)
        self.activity_hidden_from: dict[int, set[int]] = defaultdict(set)
        self.creation_restricted = False
        self.get_group_calls = 0
        self.list_child_calls = 0

    def add(self, group_id: int, slug: str, parent_id: int = NO_PARENT) -> Group:
        group = Group(id=group_id, parent_id=parent_id, slug=slug)
        self.groups[group_id] = group
        return group

    def reparent(self, group_id: int, parent_id: int) -> None:
        old = self.groups[group_id]
        self.groups[group_id] = Group(
            id=old.id, parent_id=parent_id, slug=old.slug, status=old.status
        )

    def hide(self, group_id: int, *viewer_ids: int) -> None:
        self.hidden_from[group_id].update(viewer_ids)

    # GroupStore

    def get_group(self, group_id: int) -> Group | None:
        self.get_group_calls += 1
        return self.groups.get(group_id)

    def list_child_groups(self, parent_id: int) -> list[Group]:
        self.list_child_calls += 1
        return sorted(
            (g for g in self.groups.values() if g.parent_id == parent_id),
            key=lambda g: g.id,
        )

    def get_group_by_slug(
        self, slug: str, parent_id: int | None = None
    ) -> Group | None:
        matches = sorted(
            (
                g
                for g in self.groups.values()
                if g.slug == slug and (parent_id is None or g.parent_id == parent_id)
            ),
            key=lambda g: g.id,
        )
        return matches[0] if matches else None

    # GroupMetadataStore

    def get_group_meta(self, group_id: int, key: str) -> str | None:
        return self.meta.get((group_id, str(key)))

    def set_group_meta(self, group_id: int, key: str, value: str) -> None:
        self.meta[(group_id, str(key))] = value

    # GroupRoleProvider

    def is_admin(self, user_id: int, group_id: int) -> bool:
        return (user_id, group_id) in self.admins

    def is_mod(self, user_id: int, group_id: int) -> bool:
        return (user_id, group_id) in self.mods

    def is_member(self, user_id: int, group_id: int) -> bool:
        return (
            (user_id, group_id) in self.members
            or self.is_mod(user_id, group_id)
            or self.is_admin(user_id, group_id)
        )

    def is_site_admin(self, user_id: int) -> bool:
        return user_id in self.site_admins

    # AccessPolicy

    def viewer_can_access(
        self,
        viewer_id: int,
        group_id: int,
        relation: HierarchyRelation = HierarchyRelation.DEFAULT,
    ) -> bool:
        if viewer_id in self.hidden_from.get(group_id, set()):
            return False
        if relation == HierarchyRelation.ACTIVITY:
            return viewer_id not in self.activity_hidden_from.get(group_id, set())
        return True

    def group_creation_globally_restricted(self) -> bool:
        return self.creation_restricted


@pytest.fixture
def platform() -> FakeGroupPlatform:
    """Provide an empty in-memory host platform."""
    return FakeGroupPlatform()


@pytest.fixture
def animals_tree(platform: FakeGroupPlatform) -> FakeGroupPlatform:
    """Provide a small forest.

    animals(1)
      pets(2)
        kittens(3)
        puppies(4)
      wild(5)
    plants(10)
    """
    platform.add(1, "animals")
    platform.add(2, "pets", parent_id=1)
    platform.add(3, "kittens", parent_id=2)
    platform.add(4, "puppies", parent_id=2)
    platform.add(5, "wild", parent_id=1)
    platform.add(10, "plants")
    return platform


@pytest.fixture
def cache_store() -> InMemoryCacheStore:
    """Provide an empty in-memory cache store."""
    return InMemoryCacheStore()


@pytest.fixture
def hierarchy_cache(cache_store: InMemoryCacheStore) -> HierarchyCache:
    """Provide a hierarchy cache over the in-memory store."""
    return HierarchyCache(store=cache_store, key_prefix="test")


@pytest.fixture
def hierarchy_settings() -> HierarchySettings:
    """Provide test settings independent of the environment."""
    return HierarchySettings(
        activity_enforcement="strict",
        max_depth=50,
        cache_backend="memory",
        cache_key_prefix="test",
        path_separator="/",
        groups_directory_url="/groups/",
    )
