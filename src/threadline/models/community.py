# src/threadline/models/community.py
"""SQLAlchemy models for communities and their membership."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadline.db.session import Base
from threadline.db.time import utcnow

if TYPE_CHECKING:
    from .thread import Thread
    from .user import User


class Community(Base):
    """Named group with a creator, an ordered member list and threads."""

    __tablename__ = "community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    created_by: Mapped[User | None] = relationship("User", foreign_keys=[created_by_id])
    # Both sides read the same association rows, so a user is listed in
    # `members` exactly when this community is listed in `user.communities`.
    members: Mapped[list[User]] = relationship(
        "User",
        secondary="community_member",
        back_populates="communities",
        order_by="CommunityMember.id",
    )
    threads: Mapped[list[Thread]] = relationship(
        "Thread",
        back_populates="community",
        order_by="Thread.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class CommunityMember(Base):
    """Association row placing one user in one community."""

    __tablename__ = "community_member"
    __table_args__ = (UniqueConstraint("community_id", "user_id", name="uq_community_member"),)

    # Insertion order doubles as the order of both membership lists.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
