# src/threadline/api/v1/endpoints/users.py
"""User profile and directory endpoints."""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Body, HTTPException, Query, status

from threadline.core.settings import settings
from threadline.schemas.thread import ActivityItem, ThreadSummary
from threadline.schemas.user import UserPage, UserResponse, validate_profile
from threadline.services import user_service

from ..dependencies import RevalidatorDep, SessionDep, ViewerDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=UserPage)
async def list_users(
    viewer_id: ViewerDep,
    db: SessionDep,
    q: str = Query("", description="Case-insensitive match on name or username"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort: Literal["asc", "desc"] = Query("desc"),
) -> UserPage:
    """Search people other than the viewer."""
    return await user_service.fetch_users(
        db,
        user_id=viewer_id,
        search_string=q,
        page_number=page,
        page_size=page_size,
        sort_by=sort,
    )


@router.put("/me", response_model=UserResponse)
async def update_profile(
    viewer_id: ViewerDep,
    db: SessionDep,
    revalidator: RevalidatorDep,
    submission: dict[str, Any] = Body(...),
    path: str = Query(user_service.PROFILE_EDIT_PATH, description="Page the form was sent from"),
) -> UserResponse:
    """Create or update the viewer's profile.

    The submission is checked against the profile schema first; every
    field-level violation is reported at once.
    """
    errors = validate_profile(submission)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[error.model_dump() for error in errors],
        )
    return await user_service.update_user(
        db,
        user_id=viewer_id,
        username=submission["username"],
        name=submission["name"],
        bio=submission["bio"],
        image=submission["profile_photo"],
        path=path,
        revalidator=revalidator,
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: SessionDep) -> UserResponse:
    """Get a user's profile and communities."""
    return await user_service.fetch_user(db, user_id)


@router.get("/{user_id}/threads", response_model=list[ThreadSummary])
async def get_user_threads(user_id: str, db: SessionDep) -> list[ThreadSummary]:
    """Get the top-level threads a user has posted."""
    return await user_service.fetch_user_posts(db, user_id)


@router.get("/{user_id}/activity", response_model=list[ActivityItem])
async def get_user_activity(user_id: str, db: SessionDep) -> list[ActivityItem]:
    """Get replies other people left on a user's threads."""
    return await user_service.get_activity(db, user_id)
