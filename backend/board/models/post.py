"""Post ORM — persists one message on the board.

Invariants:
    - id is an autoincrement integer primary key (listing orders by it, newest first)
    - content and posted_by are non-nullable
    - tracking_cookie keeps the serialized tracking identifier the author posted with
    - created_at / updated_at are timezone-aware UTC

Design Decisions:
    - Integer id over UUID: the delete form carries it and ordering by id equals
      ordering by insertion
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from board.db.base import Base


class Post(Base):
    """A single post on the board."""
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    posted_by: Mapped[str] = mapped_column(String(255), nullable=False)
    tracking_cookie: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
