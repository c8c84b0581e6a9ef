"""Sidebar navigation derived per request from a fixed link table."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from threadline.core.settings import settings
from threadline.schemas.navigation import NavLink, Sidebar, SignOutAction

PROFILE_ROUTE: Final[str] = "/profile"
SIGN_OUT_ACTION: Final[str] = "/api/v1/auth/sign-out"


@dataclass(frozen=True)
class LinkConfig:
    icon: str
    route: str
    label: str


SIDEBAR_LINKS: Final[tuple[LinkConfig, ...]] = (
    LinkConfig(icon="/assets/home.svg", route="/", label="Home"),
    LinkConfig(icon="/assets/search.svg", route="/search", label="Search"),
    LinkConfig(icon="/assets/heart.svg", route="/activity", label="Activity"),
    LinkConfig(icon="/assets/create.svg", route="/create-thread", label="Create Thread"),
    LinkConfig(icon="/assets/community.svg", route="/communities", label="Communities"),
    LinkConfig(icon="/assets/user.svg", route=PROFILE_ROUTE, label="Profile"),
)


def is_active(pathname: str, route: str) -> bool:
    """Exact match, or prefix match for any route longer than ``/``."""
    if pathname == route:
        return True
    return len(route) > 1 and pathname.startswith(route)


def resolve_href(route: str, viewer_id: str | None) -> str:
    if route == PROFILE_ROUTE and viewer_id:
        return f"{route}/{viewer_id}"
    return route


def build_sidebar(
    pathname: str,
    viewer_id: str | None,
    links: tuple[LinkConfig, ...] = SIDEBAR_LINKS,
) -> Sidebar:
    """Resolve the sidebar for ``pathname`` as seen by ``viewer_id``.

    Returns new objects on every call; ``links`` is never modified.
    """
    resolved = [
        NavLink(
            label=link.label,
            route=link.route,
            href=resolve_href(link.route, viewer_id),
            icon=link.icon,
            is_active=is_active(pathname, link.route),
        )
        for link in links
    ]
    sign_out = None
    if viewer_id:
        sign_out = SignOutAction(action=SIGN_OUT_ACTION, redirect_to=settings.sign_in_url)
    return Sidebar(links=resolved, sign_out=sign_out)
