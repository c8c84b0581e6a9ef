# src/threadline/models/thread.py
"""SQLAlchemy model for threads and their replies."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadline.db.session import Base
from threadline.db.time import utcnow

if TYPE_CHECKING:
    from .community import Community
    from .user import User


class Thread(Base):
    """A post. Top-level threads have ``parent_id = NULL``; replies point at their parent."""

    __tablename__ = "thread"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    community_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("thread.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )

    author: Mapped[User] = relationship("User", back_populates="threads")
    community: Mapped[Community | None] = relationship("Community", back_populates="threads")
    parent: Mapped[Thread | None] = relationship(
        "Thread",
        back_populates="children",
        remote_side=[id],
    )
    children: Mapped[list[Thread]] = relationship(
        "Thread",
        back_populates="parent",
        order_by="Thread.id",
        cascade="all, delete-orphan",
    )
