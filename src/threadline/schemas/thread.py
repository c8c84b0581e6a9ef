"""Thread-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import CommunityBrief, ORMModel, Timestamp, UserSummary


class ThreadCreate(BaseModel):
    """Schema for posting a new top-level thread."""

    text: str = Field(..., min_length=1, max_length=5000, description="Thread body")
    community_id: str | None = Field(None, description="Community to post into")
    path: str = Field("/", description="Page to revalidate after posting")


class CommentCreate(BaseModel):
    """Schema for replying to an existing thread."""

    text: str = Field(..., min_length=1, max_length=5000, description="Reply body")
    path: str = Field("/", description="Page to revalidate after replying")


class ThreadNode(ORMModel):
    """A thread with its author and no descendants."""

    id: int
    text: str
    parent_id: int | None = None
    created_at: Timestamp
    author: UserSummary


class ThreadSummary(ThreadNode):
    """Feed entry: the thread plus one level of replies."""

    community: CommunityBrief | None = None
    children: list[ThreadNode] = Field(default_factory=list)


class ThreadReply(ThreadNode):
    """A reply together with its own direct replies."""

    children: list[ThreadNode] = Field(default_factory=list)


class ThreadDetail(ThreadNode):
    """A thread with two levels of nested replies."""

    community: CommunityBrief | None = None
    children: list[ThreadReply] = Field(default_factory=list)


class ThreadPage(BaseModel):
    """One page of the top-level feed."""

    posts: list[ThreadSummary]
    is_next: bool


class ActivityItem(ThreadNode):
    """A reply someone else left on one of the viewer's threads."""
