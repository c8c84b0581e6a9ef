"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from threadline.core.security import decode_subject
from threadline.db.session import get_db
from threadline.models import User
from threadline.services.revalidation import RevalidationService, get_revalidation_service
from threadline.services.user_service import get_user_by_external_id

# HTTP Bearer scheme carrying the identity provider's session token
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _subject_from(credentials: HTTPAuthorizationCredentials) -> str:
    try:
        subject = decode_subject(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return subject


def get_current_viewer(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Return the signed-in viewer's external id.

    The viewer may not have a profile yet (onboarding), so no database
    lookup happens here.
    """
    return _subject_from(credentials)


def get_optional_viewer(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)
    ],
) -> str | None:
    """Return the viewer's external id, or None for anonymous requests."""
    if credentials is None:
        return None
    return _subject_from(credentials)


ViewerDep = Annotated[str, Depends(get_current_viewer)]
OptionalViewerDep = Annotated[str | None, Depends(get_optional_viewer)]


def get_current_user(viewer_id: ViewerDep, db: SessionDep) -> User:
    """Load the signed-in viewer's profile.

    Raises:
        HTTPException: If the viewer has not created a profile yet.
    """
    user = get_user_by_external_id(db, viewer_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_revalidator() -> RevalidationService:
    """Return the shared path revalidation service."""
    return get_revalidation_service()


# Type aliases for the remaining dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
RevalidatorDep = Annotated[RevalidationService, Depends(get_revalidator)]
