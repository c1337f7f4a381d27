"""
Blog API: Blog SQLAlchemy Model
===============================

What:  ORM model representing the `blogs` table.
Who:   Used by BlogService for CRUD operations and by Alembic for schema management.

Table Design:
    - UUID primary key, generated in Python so every backend stores the same
      opaque identifier (native UUID on PostgreSQL, CHAR(32) on SQLite)
    - title / content: required, unbounded text; presence is enforced in the service
    - created_at / updated_at: UTC, assigned on the server, never by clients.
      A new row gets one timestamp for both.

    Index on created_at: list pages are read in insertion order
    (ORDER BY created_at, id).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Blog(Base):
    """
    A single blog post.

    Lifecycle:
        1. Created by POST /api/blogs (id and timestamps assigned here)
        2. Replaced field-by-field by PUT, or renamed by PATCH
           (updated_at refreshed on every UPDATE)
        3. Deleted by DELETE; no soft-delete
    """

    __tablename__ = "blogs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque identifier assigned on insert",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Blog title (non-empty)",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Blog body",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="When this blog was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        comment="When this blog was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_blogs_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}')>"
