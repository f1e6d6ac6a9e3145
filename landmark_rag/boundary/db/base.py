"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins for the chunk
columns shared by the content and local vector tables.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChunkColumnsMixin:
    """
    Mixin providing the persisted chunk layout.

    Attributes:
        id: Deterministic chunk id (primary key, overwritten on re-index)
        title: Source document title
        section: Section heading
        sequence: 1-based position within the section
        content: Chunk text
        source_ref: Page URL + section anchor
    """

    id: Mapped[str] = mapped_column(String(512), primary_key=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    section: Mapped[str] = mapped_column(String(512), nullable=False)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    source_ref: Mapped[str] = mapped_column(String(2048), nullable=False, default="")


class TimestampMixin:
    """
    Mixin providing last-modification tracking.

    Attributes:
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
