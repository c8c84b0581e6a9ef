"""Thread actions: posting, the top-level feed, reply trees and comments."""
from __future__ import annotations

import logging

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session, selectinload

from threadline.core.errors import NotFoundError, action
from threadline.models import Thread
from threadline.schemas.common import OperationResult
from threadline.schemas.thread import ThreadDetail, ThreadPage, ThreadSummary

from .community_service import get_community_by_external_id
from .pagination import has_next_page, skip_amount
from .revalidation import RevalidationService, get_revalidation_service
from .user_service import get_user_by_external_id

logger = logging.getLogger(__name__)

__all__ = [
    "add_comment_to_thread",
    "create_thread",
    "delete_thread",
    "fetch_posts",
    "fetch_thread_by_id",
]


def _revalidate(path: str, revalidator: RevalidationService | None) -> None:
    (revalidator or get_revalidation_service()).mark_stale(path)


@action("Error creating thread")
async def create_thread(
    db: Session,
    *,
    text: str,
    author_id: str,
    community_id: str | None,
    path: str,
    revalidator: RevalidationService | None = None,
) -> ThreadSummary:
    """Post a top-level thread and append it to its author's threads.

    Raises:
        NotFoundError: If the author, or the community when given, does not exist.
    """
    author = get_user_by_external_id(db, author_id)
    if author is None:
        raise NotFoundError("User not found")

    community = None
    if community_id:
        community = get_community_by_external_id(db, community_id)
        if community is None:
            raise NotFoundError("Community not found")

    thread = Thread(text=text, community=community)
    author.threads.append(thread)
    db.commit()
    db.refresh(thread)

    logger.info("User %s posted thread %d", author.external_id, thread.id)
    _revalidate(path, revalidator)
    return ThreadSummary.model_validate(thread)


@action("Error fetching posts")
async def fetch_posts(
    db: Session,
    *,
    page_number: int = 1,
    page_size: int = 20,
) -> ThreadPage:
    """Return one page of top-level threads, newest first."""
    skip = skip_amount(page_number, page_size)
    top_level = Thread.parent_id.is_(None)

    total = db.scalar(select(func.count()).select_from(Thread).where(top_level)) or 0
    posts = db.scalars(
        select(Thread)
        .where(top_level)
        .order_by(desc(Thread.created_at), desc(Thread.id))
        .offset(skip)
        .limit(page_size)
        .options(
            selectinload(Thread.author),
            selectinload(Thread.community),
            selectinload(Thread.children).selectinload(Thread.author),
        )
    ).all()
    return ThreadPage(
        posts=[ThreadSummary.model_validate(p) for p in posts],
        is_next=has_next_page(total, skip, len(posts)),
    )


@action("Error fetching thread by id")
async def fetch_thread_by_id(db: Session, thread_id: int) -> ThreadDetail:
    """Return a thread with two levels of replies and their authors."""
    thread = db.scalars(
        select(Thread)
        .where(Thread.id == thread_id)
        .options(
            selectinload(Thread.author),
            selectinload(Thread.community),
            selectinload(Thread.children).selectinload(Thread.author),
            selectinload(Thread.children)
            .selectinload(Thread.children)
            .selectinload(Thread.author),
        )
    ).first()
    if thread is None:
        raise NotFoundError("Thread not found")
    return ThreadDetail.model_validate(thread)


@action("Error creating comment")
async def add_comment_to_thread(
    db: Session,
    *,
    thread_id: int,
    comment_text: str,
    user_id: str,
    path: str,
    revalidator: RevalidationService | None = None,
) -> ThreadSummary:
    """Reply to ``thread_id`` and append the reply to the parent's children."""
    parent = db.get(Thread, thread_id)
    if parent is None:
        raise NotFoundError("Thread not found")

    author = get_user_by_external_id(db, user_id)
    if author is None:
        raise NotFoundError("User not found")

    comment = Thread(text=comment_text, author=author, community_id=parent.community_id)
    parent.children.append(comment)
    db.commit()
    db.refresh(comment)

    logger.info("User %s replied to thread %d with %d", author.external_id, parent.id, comment.id)
    _revalidate(path, revalidator)
    return ThreadSummary.model_validate(comment)


def _count_descendants(thread: Thread) -> int:
    pending = list(thread.children)
    count = 0
    while pending:
        node = pending.pop()
        count += 1
        pending.extend(node.children)
    return count


@action("Failed to delete thread")
async def delete_thread(
    db: Session,
    *,
    thread_id: int,
    path: str,
    revalidator: RevalidationService | None = None,
) -> OperationResult:
    """Delete a thread and every reply beneath it."""
    thread = db.get(Thread, thread_id)
    if thread is None:
        raise NotFoundError("Thread not found")

    descendants = _count_descendants(thread)
    # The children relationship cascades, so the whole subtree goes with it.
    db.delete(thread)
    db.commit()

    logger.info("Deleted thread %d and %d replies", thread_id, descendants)
    _revalidate(path, revalidator)
    return OperationResult(success=True)
