# src/threadline/schemas/community.py
"""Community-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import ExternalId, ORMModel, Timestamp, UserSummary
from .thread import ThreadSummary


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    id: str = Field(..., min_length=1, description="Identifier issued by the identity provider")
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=100)
    image: str | None = None
    bio: str | None = None


class CommunityUpdate(BaseModel):
    """Schema for overwriting a community's display metadata."""

    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=100)
    image: str | None = None


class MemberAdd(BaseModel):
    """Schema naming the user to add to a community."""

    user_id: str = Field(..., min_length=1)


class CommunityResponse(ORMModel):
    """Community with its creator and members."""

    id: ExternalId
    name: str
    username: str
    image: str | None = None
    bio: str | None = None
    created_at: Timestamp
    created_by: UserSummary | None = None
    members: list[UserSummary] = Field(default_factory=list)


class CommunityPosts(ORMModel):
    """Community with its top-level threads."""

    id: ExternalId
    name: str
    username: str
    image: str | None = None
    threads: list[ThreadSummary] = Field(default_factory=list)


class CommunityPage(BaseModel):
    """One page of community search results."""

    communities: list[CommunityResponse]
    is_next: bool
