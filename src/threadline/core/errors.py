"""Error taxonomy shared by the service actions.

Every action catches failures at its own boundary and re-raises one of the
classes below with an operation-specific prefix. The original exception is
kept as ``__cause__``.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class ErrorKind(str, Enum):
    """Closed set of failure categories an action can report."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UPSTREAM = "upstream"


class ActionError(Exception):
    """Base class for failures raised by service actions."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class NotFoundError(ActionError):
    """A referenced user, community or thread does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(ActionError):
    """The write would duplicate an existing record or membership."""

    kind = ErrorKind.CONFLICT


class UpstreamError(ActionError):
    """Unclassified failure from the database or another collaborator."""

    kind = ErrorKind.UPSTREAM


def _find_session(args: tuple[object, ...]) -> Session | None:
    for arg in args:
        if isinstance(arg, Session):
            return arg
    return None


def action(operation: str) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Wrap an async action so every failure surfaces as an ``ActionError``.

    Args:
        operation: Human-readable prefix prepended to the error message.

    The session passed to the action (if any) is rolled back before the
    error propagates, so partial writes of a failed action are discarded.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                session = _find_session(args) or _find_session(tuple(kwargs.values()))
                if session is not None:
                    session.rollback()

                if isinstance(exc, ActionError):
                    error: ActionError = type(exc)(exc.message, operation=operation)
                elif isinstance(exc, IntegrityError):
                    error = ConflictError(str(exc.orig), operation=operation)
                else:
                    error = UpstreamError(str(exc) or type(exc).__name__, operation=operation)

                if error.kind is ErrorKind.UPSTREAM:
                    logger.error("%s failed", operation, exc_info=exc)
                else:
                    logger.info("%s rejected: %s", operation, error.message)
                raise error from exc

        return wrapper

    return decorator
