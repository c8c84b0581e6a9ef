# src/threadline/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import CommunityBrief, OperationResult, UserSummary
from .community import (
    CommunityCreate,
    CommunityPage,
    CommunityPosts,
    CommunityResponse,
    CommunityUpdate,
    MemberAdd,
)
from .navigation import NavLink, Sidebar, SignOutAction
from .thread import (
    ActivityItem,
    CommentCreate,
    ThreadCreate,
    ThreadDetail,
    ThreadPage,
    ThreadSummary,
)
from .user import FieldError, ProfileSubmission, UserPage, UserResponse, validate_profile

__all__ = [
    "CommunityBrief", "OperationResult", "UserSummary",
    "CommunityCreate", "CommunityPage", "CommunityPosts", "CommunityResponse",
    "CommunityUpdate", "MemberAdd",
    "NavLink", "Sidebar", "SignOutAction",
    "ActivityItem", "CommentCreate", "ThreadCreate", "ThreadDetail", "ThreadPage",
    "ThreadSummary",
    "FieldError", "ProfileSubmission", "UserPage", "UserResponse", "validate_profile",
]
