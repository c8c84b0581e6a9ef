# src/threadline/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .communities import router as communities_router
from .navigation import router as navigation_router
from .revalidation import router as revalidation_router
from .threads import router as threads_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "communities_router",
    "navigation_router",
    "revalidation_router",
    "threads_router",
    "users_router",
]
