"""Schemas describing the sidebar navigation."""

from pydantic import BaseModel


class NavLink(BaseModel):
    """A sidebar entry resolved for one request."""

    label: str
    route: str
    href: str
    icon: str
    is_active: bool


class SignOutAction(BaseModel):
    """How a client triggers sign-out and where it lands afterwards."""

    action: str
    method: str = "POST"
    redirect_to: str


class Sidebar(BaseModel):
    """Navigation links plus the sign-out affordance for signed-in viewers."""

    links: list[NavLink]
    sign_out: SignOutAction | None = None
