"""Skip/limit arithmetic and search filters shared by the list actions."""
from __future__ import annotations

from typing import Literal

from sqlalchemy import ColumnElement, or_
from sqlalchemy.orm import InstrumentedAttribute

SortOrder = Literal["asc", "desc"]


def skip_amount(page_number: int, page_size: int) -> int:
    """Return how many rows precede ``page_number`` (1-based)."""
    if page_number < 1:
        raise ValueError("page_number must be at least 1")
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return (page_number - 1) * page_size


def has_next_page(total: int, skip: int, returned: int) -> bool:
    """True when rows remain after the current page."""
    return total > skip + returned


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def matches_any(
    search_string: str,
    *columns: InstrumentedAttribute[str],
) -> ColumnElement[bool] | None:
    """Case-insensitive substring filter over ``columns``; None for a blank search."""
    term = search_string.strip()
    if not term:
        return None
    pattern = f"%{_escape_like(term)}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))
