"""
Snippets API — Snippet and Profile SQLAlchemy Models
=====================================================

What:  ORM models for the `profiles` and `snippets` tables in PostgreSQL.
How:   Inherit from the shared DeclarativeBase; Alembic reads them for
       migrations and the snippet store builds its statements from them.

Table Design:
    profiles  — one row per user, keyed by the identity provider's user id.
                Read-only here (username/avatar are joined onto snippets).
    snippets  — owner reference `user_id` → profiles.id, set once on insert.
                `tags` is a text[] so that tag filters can use `@>`.

Query Patterns:
    - Public feed: WHERE is_public ORDER BY created_at DESC
      → idx_snippets_created_at
    - Owner feed / ownership check: WHERE user_id = :uid / WHERE id = :id
      → idx_snippets_user_id / primary key
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from snippets_api.database import Base


class Profile(Base):
    """Public profile of a user; the join target for snippet listings."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        comment="User id issued by the identity provider",
    )
    username: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, username='{self.username}')>"


class Snippet(Base):
    """
    A stored unit of source code with its metadata.

    Lifecycle:
        1. Inserted by an authenticated caller; user_id bound to the caller
        2. Partially updated by its owner (user_id and created_at untouched)
        3. Hard-deleted by its owner
    """

    __tablename__ = "snippets"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(Text, nullable=False)
    language: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[List[str]] = mapped_column(
        ARRAY(Text),
        nullable=False,
        default=list,
        server_default=text("'{}'::text[]"),
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owner reference; never changes after insert",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_snippets_created_at", created_at.desc()),
        Index("idx_snippets_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Snippet(id={self.id}, title='{self.title}', "
            f"language='{self.language}', is_public={self.is_public})>"
        )
