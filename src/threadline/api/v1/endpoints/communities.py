# src/threadline/api/v1/endpoints/communities.py
"""Community-related endpoints for the Threadline API."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.orm import Session

from threadline.core.settings import settings
from threadline.schemas.common import OperationResult
from threadline.schemas.community import (
    CommunityCreate,
    CommunityPage,
    CommunityPosts,
    CommunityResponse,
    CommunityUpdate,
    MemberAdd,
)
from threadline.services import community_service

from ..dependencies import SessionDep, ViewerDep

router = APIRouter(prefix="/communities", tags=["communities"])


def _require_creator(db: Session, community_id: str, viewer_id: str) -> None:
    """Reject writes by anyone but the creator; missing communities fall through to the action."""
    community = community_service.get_community_by_external_id(db, community_id)
    if community is None:
        return
    creator = community.created_by
    if creator is None or creator.external_id != viewer_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the community creator can do this",
        )


@router.get("/", response_model=CommunityPage)
async def list_communities(
    db: SessionDep,
    q: str = Query("", description="Case-insensitive match on name or username"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort: Literal["asc", "desc"] = Query("desc", description="Creation time order"),
) -> CommunityPage:
    """Search communities, one page at a time."""
    return await community_service.fetch_communities(
        db,
        search_string=q,
        page_number=page,
        page_size=page_size,
        sort_by=sort,
    )


@router.post("/", response_model=CommunityResponse, status_code=status.HTTP_201_CREATED)
async def create_community(
    community_data: CommunityCreate,
    viewer_id: ViewerDep,
    db: SessionDep,
) -> CommunityResponse:
    """Create a new community owned by the viewer."""
    return await community_service.create_community(
        db,
        community_id=community_data.id,
        name=community_data.name,
        username=community_data.username,
        image=community_data.image,
        bio=community_data.bio,
        created_by_id=viewer_id,
    )


@router.get("/{community_id}", response_model=CommunityResponse)
async def get_community(community_id: str, db: SessionDep) -> CommunityResponse:
    """Get a community with its creator and members."""
    return await community_service.fetch_community_details(db, community_id)


@router.get("/{community_id}/posts", response_model=CommunityPosts)
async def get_community_posts(community_id: str, db: SessionDep) -> CommunityPosts:
    """Get the top-level threads posted in a community."""
    return await community_service.fetch_community_posts(db, community_id)


@router.patch("/{community_id}", response_model=CommunityResponse)
async def update_community(
    community_id: str,
    update: CommunityUpdate,
    viewer_id: ViewerDep,
    db: SessionDep,
) -> CommunityResponse:
    """Overwrite a community's name, username and image."""
    _require_creator(db, community_id, viewer_id)
    return await community_service.update_community_info(
        db,
        community_id=community_id,
        name=update.name,
        username=update.username,
        image=update.image,
    )


@router.delete("/{community_id}", response_model=CommunityResponse)
async def delete_community(
    community_id: str,
    viewer_id: ViewerDep,
    db: SessionDep,
) -> CommunityResponse:
    """Delete a community, its threads and every membership."""
    _require_creator(db, community_id, viewer_id)
    return await community_service.delete_community(db, community_id)


@router.post(
    "/{community_id}/members",
    response_model=CommunityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_member(
    community_id: str,
    member: MemberAdd,
    viewer_id: ViewerDep,
    db: SessionDep,
) -> CommunityResponse:
    """Join a community, or add someone else as its creator."""
    if member.user_id != viewer_id:
        _require_creator(db, community_id, viewer_id)
    return await community_service.add_member_to_community(
        db,
        community_id=community_id,
        member_id=member.user_id,
    )


@router.delete("/{community_id}/members/{user_id}", response_model=OperationResult)
async def remove_member(
    community_id: str,
    user_id: str,
    viewer_id: ViewerDep,
    db: SessionDep,
) -> OperationResult:
    """Leave a community, or remove someone else as its creator."""
    if user_id != viewer_id:
        _require_creator(db, community_id, viewer_id)
    return await community_service.remove_user_from_community(
        db,
        community_id=community_id,
        user_id=user_id,
    )
