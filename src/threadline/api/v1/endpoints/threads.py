# src/threadline/api/v1/endpoints/threads.py
"""Thread-related endpoints for the Threadline API."""

from fastapi import APIRouter, HTTPException, Query, status

from threadline.core.settings import settings
from threadline.models import Thread
from threadline.schemas.common import OperationResult
from threadline.schemas.thread import (
    CommentCreate,
    ThreadCreate,
    ThreadDetail,
    ThreadPage,
    ThreadSummary,
)
from threadline.services import thread_service

from ..dependencies import CurrentUserDep, RevalidatorDep, SessionDep, ViewerDep

router = APIRouter(prefix="/threads", tags=["threads"])


@router.get("/", response_model=ThreadPage)
async def list_threads(
    db: SessionDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Maximum number of threads to return",
    ),
) -> ThreadPage:
    """List top-level threads, newest first.

    Replies never appear here; fetch a thread to see them.
    """
    return await thread_service.fetch_posts(db, page_number=page, page_size=page_size)


@router.post("/", response_model=ThreadSummary, status_code=status.HTTP_201_CREATED)
async def create_thread(
    thread_data: ThreadCreate,
    viewer_id: ViewerDep,
    db: SessionDep,
    revalidator: RevalidatorDep,
) -> ThreadSummary:
    """Post a new thread as the viewer, optionally inside a community."""
    return await thread_service.create_thread(
        db,
        text=thread_data.text,
        author_id=viewer_id,
        community_id=thread_data.community_id,
        path=thread_data.path,
        revalidator=revalidator,
    )


@router.get("/{thread_id}", response_model=ThreadDetail)
async def get_thread(thread_id: int, db: SessionDep) -> ThreadDetail:
    """Get a thread with two levels of replies."""
    return await thread_service.fetch_thread_by_id(db, thread_id)


@router.post(
    "/{thread_id}/comments",
    response_model=ThreadSummary,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    thread_id: int,
    comment: CommentCreate,
    viewer_id: ViewerDep,
    db: SessionDep,
    revalidator: RevalidatorDep,
) -> ThreadSummary:
    """Reply to a thread as the viewer."""
    return await thread_service.add_comment_to_thread(
        db,
        thread_id=thread_id,
        comment_text=comment.text,
        user_id=viewer_id,
        path=comment.path,
        revalidator=revalidator,
    )


@router.delete("/{thread_id}", response_model=OperationResult)
async def delete_thread(
    thread_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    revalidator: RevalidatorDep,
    path: str = Query("/", description="Page to revalidate after deleting"),
) -> OperationResult:
    """Delete one of the viewer's threads along with all replies to it."""
    thread = db.get(Thread, thread_id)
    if thread is not None and thread.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author can delete this thread",
        )
    return await thread_service.delete_thread(
        db,
        thread_id=thread_id,
        path=path,
        revalidator=revalidator,
    )
