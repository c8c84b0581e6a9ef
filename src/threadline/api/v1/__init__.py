"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    communities_router,
    navigation_router,
    revalidation_router,
    threads_router,
    users_router,
)

__all__ = [
    "auth_router",
    "communities_router",
    "navigation_router",
    "revalidation_router",
    "threads_router",
    "users_router",
]
