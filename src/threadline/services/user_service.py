"""User directory actions: profiles, people search and reply activity."""
from __future__ import annotations

import logging

from sqlalchemy import asc, desc, func, select
from sqlalchemy.orm import Session, selectinload

from threadline.core.errors import ConflictError, NotFoundError, action
from threadline.models import Thread, User
from threadline.schemas.thread import ActivityItem, ThreadSummary
from threadline.schemas.user import UserPage, UserResponse, UserSummary

from .pagination import SortOrder, has_next_page, matches_any, skip_amount
from .revalidation import RevalidationService, get_revalidation_service

logger = logging.getLogger(__name__)

PROFILE_EDIT_PATH = "/profile/edit"

__all__ = [
    "fetch_user",
    "fetch_user_posts",
    "fetch_users",
    "get_activity",
    "get_user_by_external_id",
    "update_user",
]


def get_user_by_external_id(db: Session, user_id: str) -> User | None:
    """Return a single user by the identity provider's id."""
    return db.scalars(select(User).where(User.external_id == user_id)).first()


def _require_user(db: Session, user_id: str) -> User:
    user = get_user_by_external_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@action("Failed to fetch user")
async def fetch_user(db: Session, user_id: str) -> UserResponse:
    """Return a user's profile with their communities."""
    user = db.scalars(
        select(User)
        .where(User.external_id == user_id)
        .options(selectinload(User.communities))
    ).first()
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse.model_validate(user)


@action("Failed to create/update user")
async def update_user(
    db: Session,
    *,
    user_id: str,
    username: str,
    name: str,
    bio: str,
    image: str,
    path: str,
    revalidator: RevalidationService | None = None,
) -> UserResponse:
    """Create or update the profile for ``user_id`` and mark it onboarded."""
    username = username.lower()
    taken = db.scalars(
        select(User.id).where(User.username == username, User.external_id != user_id)
    ).first()
    if taken is not None:
        raise ConflictError(f"Username '{username}' is already taken")

    user = get_user_by_external_id(db, user_id)
    if user is None:
        user = User(external_id=user_id)
        db.add(user)
        logger.info("Onboarding new user %s", user_id)

    user.username = username
    user.name = name
    user.bio = bio
    user.image = image
    user.onboarded = True
    db.commit()
    db.refresh(user)

    if path == PROFILE_EDIT_PATH:
        (revalidator or get_revalidation_service()).mark_stale(path)
    return UserResponse.model_validate(user)


@action("Failed to fetch user posts")
async def fetch_user_posts(db: Session, user_id: str) -> list[ThreadSummary]:
    """Return the user's top-level threads with their community and replies."""
    user = _require_user(db, user_id)
    threads = db.scalars(
        select(Thread)
        .where(Thread.author_id == user.id, Thread.parent_id.is_(None))
        .order_by(desc(Thread.created_at), desc(Thread.id))
        .options(
            selectinload(Thread.author),
            selectinload(Thread.community),
            selectinload(Thread.children).selectinload(Thread.author),
        )
    ).all()
    return [ThreadSummary.model_validate(t) for t in threads]


@action("Failed to fetch users")
async def fetch_users(
    db: Session,
    *,
    user_id: str,
    search_string: str = "",
    page_number: int = 1,
    page_size: int = 20,
    sort_by: SortOrder = "desc",
) -> UserPage:
    """Search people other than the viewer by name or username."""
    skip = skip_amount(page_number, page_size)
    conditions = [User.external_id != user_id]
    criterion = matches_any(search_string, User.username, User.name)
    if criterion is not None:
        conditions.append(criterion)

    order = asc if sort_by == "asc" else desc
    total = db.scalar(select(func.count()).select_from(User).where(*conditions)) or 0
    users = db.scalars(
        select(User)
        .where(*conditions)
        .order_by(order(User.created_at), order(User.id))
        .offset(skip)
        .limit(page_size)
    ).all()
    return UserPage(
        users=[UserSummary.model_validate(u) for u in users],
        is_next=has_next_page(total, skip, len(users)),
    )


@action("Failed to fetch activity")
async def get_activity(db: Session, user_id: str) -> list[ActivityItem]:
    """Return replies other people left on the user's threads, newest first."""
    user = _require_user(db, user_id)
    own_thread_ids = select(Thread.id).where(Thread.author_id == user.id)
    replies = db.scalars(
        select(Thread)
        .where(Thread.parent_id.in_(own_thread_ids), Thread.author_id != user.id)
        .order_by(desc(Thread.created_at), desc(Thread.id))
        .options(selectinload(Thread.author))
    ).all()
    return [ActivityItem.model_validate(r) for r in replies]
