"""
Postboard Backend — Post SQLAlchemy Model
===========================================

What:  ORM model for the `posts` table, the single collection of the store.
How:   Inherits from the project's DeclarativeBase. PostStore.connect() runs
       metadata.create_all(), so the table appears on first use of a fresh
       database.

Table Design:
    - id: UUID generated in Python at insert; the generic Uuid type maps to
      native UUID on PostgreSQL and CHAR(32) on SQLite
    - title / content: TEXT NOT NULL. A missing value fails at insert.
"""

import uuid

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base


class Post(Base):
    """
    A stored post.

    Lifecycle:
        1. Inserted by PostStore.create() (id assigned here, never changed)
        2. title/content replaced by PostStore.update()
        3. Removed for good by PostStore.delete()
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned identifier, immutable",
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title[:30] if self.title else ''!r})>"
