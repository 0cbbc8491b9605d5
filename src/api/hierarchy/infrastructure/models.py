"""SQLAlchemy ORM mappings of the host platform's group tables.

The host owns and migrates these tables. The mappings cover only the
columns the hierarchy engine reads or writes: the parent reference, the
slug and status of each group, and the key-value metadata rows.
"""

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class HostBase(DeclarativeBase):
    """Declarative base for mappings of host-owned tables.

    Kept separate from any application metadata so the engine never
    issues DDL for tables it does not own.
    """


class GroupRecord(HostBase):
    """ORM model for the groups table (read-only to the engine)."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    parent_id: Mapped[int | None] = mapped_column(
        BigInteger, nullable=True, index=True, default=0
    )
    slug: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="public")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupRecord(id={self.id}, parent_id={self.parent_id}, slug={self.slug})>"
        )


class GroupMetaRecord(HostBase):
    """ORM model for the per-group key-value metadata table."""

    __tablename__ = "groups_groupmeta"
    __table_args__ = (Index("ix_groups_groupmeta_group_key", "group_id", "meta_key"),)

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    group_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False
    )
    meta_key: Mapped[str] = mapped_column(String(255), nullable=False)
    meta_value: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupMetaRecord(group_id={self.group_id}, meta_key={self.meta_key})>"
