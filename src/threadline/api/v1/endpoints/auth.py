# src/threadline/api/v1/endpoints/auth.py
"""Session endpoints; sign-in itself is handled by the identity provider."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from threadline.core.settings import settings

from ..dependencies import OptionalViewerDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-out", response_class=RedirectResponse)
async def sign_out(viewer_id: OptionalViewerDep) -> RedirectResponse:
    """Drop the session cookie and send the client to the sign-in page."""
    response = RedirectResponse(url=settings.sign_in_url, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    if viewer_id:
        logger.info("Viewer %s signed out", viewer_id)
    return response
