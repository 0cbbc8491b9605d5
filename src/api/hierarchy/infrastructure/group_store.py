"""SQLAlchemy implementation of the group store and metadata ports.

Reads group records and metadata from the host platform's tables using
a synchronous session owned by the host. Writes are flushed but never
committed; the host's request transaction decides.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from hierarchy.domain.value_objects import NO_PARENT, Group
from hierarchy.infrastructure.models import GroupMetaRecord, GroupRecord
from hierarchy.ports.collaborators import GroupMetadataStore, GroupStore


def _to_domain(record: GroupRecord) -> Group:
    return Group(
        id=record.id,
        parent_id=record.parent_id or NO_PARENT,
        slug=record.slug,
        status=record.status,
    )


def _parent_condition(parent_id: int):
    # Hosts store top-level groups with parent 0 or NULL.
    if parent_id == NO_PARENT:
        return (GroupRecord.parent_id == NO_PARENT) | GroupRecord.parent_id.is_(None)
    return GroupRecord.parent_id == parent_id


class SqlGroupStore(GroupStore, GroupMetadataStore):
    """Group store backed by the host's relational database."""

    def __init__(self, session: Session) -> None:
        """Initialize with a database session.

        Args:
            session: Session bound to the host database
        """
        self._session = session

    def get_group(self, group_id: int) -> Group | None:
        record = self._session.get(GroupRecord, group_id)
        return _to_domain(record) if record is not None else None

    def list_child_groups(self, parent_id: int) -> list[Group]:
        stmt = (
            select(GroupRecord)
            .where(_parent_condition(parent_id))
            .order_by(GroupRecord.id)
        )
        return [_to_domain(record) for record in self._session.scalars(stmt)]

    def get_group_by_slug(
        self, slug: str, parent_id: int | None = None
    ) -> Group | None:
        stmt = select(GroupRecord).where(GroupRecord.slug == slug)
        if parent_id is not None:
            stmt = stmt.where(_parent_condition(parent_id))
        # Lowest id wins when groups under different parents share a slug.
        stmt = stmt.order_by(GroupRecord.id).limit(1)
        record = self._session.scalars(stmt).first()
        return _to_domain(record) if record is not None else None

    def _meta_record(self, group_id: int, key: str) -> GroupMetaRecord | None:
        stmt = (
            select(GroupMetaRecord)
            .where(
                GroupMetaRecord.group_id == group_id,
                GroupMetaRecord.meta_key == str(key),
            )
            .order_by(GroupMetaRecord.id)
            .limit(1)
        )
        return self._session.scalars(stmt).first()

    def get_group_meta(self, group_id: int, key: str) -> str | None:
        record = self._meta_record(group_id, key)
        return record.meta_value if record is not None else None

    def set_group_meta(self, group_id: int, key: str, value: str) -> None:
        record = self._meta_record(group_id, key)
        if record is None:
            self._session.add(
                GroupMetaRecord(group_id=group_id, meta_key=str(key), meta_value=value)
            )
        else:
            record.meta_value = value
        self._session.flush()
