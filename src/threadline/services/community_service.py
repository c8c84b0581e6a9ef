"""Community actions: creation, lookup, membership and cascading deletes."""
from __future__ import annotations

import logging

from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.orm import Session, selectinload

from threadline.core.errors import ConflictError, NotFoundError, action
from threadline.models import Community, Thread, User
from threadline.schemas.common import OperationResult
from threadline.schemas.community import CommunityPage, CommunityPosts, CommunityResponse
from threadline.schemas.thread import ThreadSummary

from .pagination import SortOrder, has_next_page, matches_any, skip_amount
from .user_service import get_user_by_external_id

logger = logging.getLogger(__name__)

__all__ = [
    "add_member_to_community",
    "create_community",
    "delete_community",
    "fetch_communities",
    "fetch_community_details",
    "fetch_community_posts",
    "get_community_by_external_id",
    "remove_user_from_community",
    "update_community_info",
]


def get_community_by_external_id(db: Session, community_id: str) -> Community | None:
    """Return a community by the identifier clients know it by."""
    return db.scalars(select(Community).where(Community.external_id == community_id)).first()


def _require_community(db: Session, community_id: str) -> Community:
    community = get_community_by_external_id(db, community_id)
    if community is None:
        raise NotFoundError("Community not found")
    return community


def _require_user(db: Session, user_id: str) -> User:
    user = get_user_by_external_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _ensure_username_free(db: Session, username: str, *, exclude_id: int | None = None) -> None:
    stmt = select(Community.id).where(Community.username == username)
    if exclude_id is not None:
        stmt = stmt.where(Community.id != exclude_id)
    if db.scalars(stmt).first() is not None:
        raise ConflictError(f"Community username '{username}' is already taken")


@action("Error while trying to create community")
async def create_community(
    db: Session,
    *,
    community_id: str,
    name: str,
    username: str,
    image: str | None,
    bio: str | None,
    created_by_id: str,
) -> CommunityResponse:
    """Create a community owned by ``created_by_id``.

    The creator is recorded as the first member, which also appends the new
    community to the creator's community list.

    Raises:
        NotFoundError: If the creator does not exist.
        ConflictError: If the id or username is already in use.
    """
    user = _require_user(db, created_by_id)

    if get_community_by_external_id(db, community_id) is not None:
        raise ConflictError(f"Community '{community_id}' already exists")
    _ensure_username_free(db, username)

    community = Community(
        external_id=community_id,
        name=name,
        username=username,
        image=image,
        bio=bio,
        created_by=user,
    )
    community.members.append(user)
    db.add(community)
    db.commit()
    db.refresh(community)

    logger.info("Created community %s owned by %s", community.external_id, user.external_id)
    return CommunityResponse.model_validate(community)


@action("Error while trying to fetch community data")
async def fetch_community_details(db: Session, community_id: str) -> CommunityResponse:
    """Return a community with its creator and members hydrated."""
    community = db.scalars(
        select(Community)
        .where(Community.external_id == community_id)
        .options(selectinload(Community.created_by), selectinload(Community.members))
    ).first()
    if community is None:
        raise NotFoundError("Community not found")
    return CommunityResponse.model_validate(community)


@action("Error while trying to fetch community posts")
async def fetch_community_posts(db: Session, community_id: str) -> CommunityPosts:
    """Return a community's top-level threads, newest first."""
    community = _require_community(db, community_id)
    threads = db.scalars(
        select(Thread)
        .where(Thread.community_id == community.id, Thread.parent_id.is_(None))
        .order_by(desc(Thread.created_at), desc(Thread.id))
        .options(
            selectinload(Thread.author),
            selectinload(Thread.community),
            selectinload(Thread.children).selectinload(Thread.author),
        )
    ).all()
    return CommunityPosts(
        id=community.external_id,
        name=community.name,
        username=community.username,
        image=community.image,
        threads=[ThreadSummary.model_validate(t) for t in threads],
    )


@action("Error while trying to fetch communities")
async def fetch_communities(
    db: Session,
    *,
    search_string: str = "",
    page_number: int = 1,
    page_size: int = 20,
    sort_by: SortOrder = "desc",
) -> CommunityPage:
    """Search communities by name or username, one page at a time."""
    skip = skip_amount(page_number, page_size)
    criterion = matches_any(search_string, Community.name, Community.username)

    count_stmt = select(func.count()).select_from(Community)
    stmt = select(Community)
    if criterion is not None:
        count_stmt = count_stmt.where(criterion)
        stmt = stmt.where(criterion)

    order = asc if sort_by == "asc" else desc
    stmt = (
        stmt.order_by(order(Community.created_at), order(Community.id))
        .offset(skip)
        .limit(page_size)
        .options(selectinload(Community.created_by), selectinload(Community.members))
    )

    total = db.scalar(count_stmt) or 0
    communities = db.scalars(stmt).all()
    return CommunityPage(
        communities=[CommunityResponse.model_validate(c) for c in communities],
        is_next=has_next_page(total, skip, len(communities)),
    )


@action("Error while adding member to community")
async def add_member_to_community(
    db: Session,
    *,
    community_id: str,
    member_id: str,
) -> CommunityResponse:
    """Add ``member_id`` to the community's members and the community to the user's list.

    Raises:
        NotFoundError: If the community or user does not exist.
        ConflictError: If the user already belongs to the community.
    """
    community = _require_community(db, community_id)
    user = _require_user(db, member_id)

    if user in community.members:
        raise ConflictError("User is already a member of the community")

    community.members.append(user)
    db.commit()
    db.refresh(community)

    logger.info("Added %s to community %s", user.external_id, community.external_id)
    return CommunityResponse.model_validate(community)


@action("Error while removing member from community")
async def remove_user_from_community(
    db: Session,
    *,
    community_id: str,
    user_id: str,
) -> OperationResult:
    """Pull the user from the community and the community from the user.

    Removing someone who is not a member succeeds without changing anything.
    """
    user = _require_user(db, user_id)
    community = _require_community(db, community_id)

    if user in community.members:
        community.members.remove(user)
        db.commit()
        logger.info("Removed %s from community %s", user.external_id, community.external_id)
    return OperationResult(success=True)


@action("Error while updating community information")
async def update_community_info(
    db: Session,
    *,
    community_id: str,
    name: str,
    username: str,
    image: str | None,
) -> CommunityResponse:
    """Overwrite a community's name, username and image."""
    community = _require_community(db, community_id)
    _ensure_username_free(db, username, exclude_id=community.id)

    community.name = name
    community.username = username
    community.image = image
    db.commit()
    db.refresh(community)
    return CommunityResponse.model_validate(community)


@action("Error deleting community")
async def delete_community(db: Session, community_id: str) -> CommunityResponse:
    """Delete a community together with its threads and memberships.

    All writes run in one transaction: if any step fails nothing is removed.
    """
    community = db.scalars(
        select(Community)
        .where(Community.external_id == community_id)
        .options(selectinload(Community.created_by), selectinload(Community.members))
    ).first()
    if community is None:
        raise NotFoundError("Community not found")

    deleted = CommunityResponse.model_validate(community)
    former_members = len(community.members)

    # Pull the community out of every member's list.
    community.members.clear()
    # Replies inherit their parent's community, so this removes whole trees.
    result = db.execute(
        delete(Thread)
        .where(Thread.community_id == community.id)
        .execution_options(synchronize_session="fetch")
    )
    db.expire(community, ["threads"])
    db.delete(community)
    db.commit()

    logger.info(
        "Deleted community %s (%d threads, %d memberships)",
        community_id,
        result.rowcount,
        former_members,
    )
    return deleted
