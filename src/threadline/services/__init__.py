# src/threadline/services/__init__.py
"""Business logic for the Threadline application."""

from .navigation import build_sidebar
from .revalidation import RevalidationService, get_revalidation_service

__all__ = [
    "RevalidationService",
    "build_sidebar",
    "get_revalidation_service",
]
