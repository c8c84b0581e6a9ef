# src/threadline/models/user.py
"""SQLAlchemy model for people known to the identity provider."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadline.db.session import Base
from threadline.db.time import utcnow

if TYPE_CHECKING:
    from .community import Community
    from .thread import Thread


class User(Base):
    """A person, keyed internally by ``id`` and externally by the provider's id."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Identifier issued by the identity provider; what clients refer to.
    external_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    onboarded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    threads: Mapped[list[Thread]] = relationship(
        "Thread",
        back_populates="author",
        order_by="Thread.id",
    )
    communities: Mapped[list[Community]] = relationship(
        "Community",
        secondary="community_member",
        back_populates="members",
        order_by="CommunityMember.id",
    )
