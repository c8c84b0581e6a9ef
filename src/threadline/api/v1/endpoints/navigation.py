# src/threadline/api/v1/endpoints/navigation.py
"""Navigation endpoints for clients rendering the sidebar."""

from fastapi import APIRouter, Query

from threadline.schemas.navigation import Sidebar
from threadline.services.navigation import build_sidebar

from ..dependencies import OptionalViewerDep

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("/sidebar", response_model=Sidebar)
async def get_sidebar(
    viewer_id: OptionalViewerDep,
    pathname: str = Query("/", description="Location currently displayed by the client"),
) -> Sidebar:
    """Return the sidebar links with the current location highlighted."""
    return build_sidebar(pathname, viewer_id)
