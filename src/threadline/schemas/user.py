"""User-related Pydantic schemas and the profile validation schema."""

from __future__ import annotations

from typing import Any

from pydantic import AnyUrl, BaseModel, Field, ValidationError

from .common import CommunityBrief, ExternalId, ORMModel, Timestamp, UserSummary


class ProfileSubmission(BaseModel):
    """Fields a person submits when completing or editing their profile."""

    profile_photo: AnyUrl = Field(..., description="Avatar URL")
    name: str = Field(..., min_length=2, max_length=40)
    username: str = Field(..., min_length=2, max_length=40)
    bio: str = Field(..., min_length=2, max_length=1000)


class FieldError(BaseModel):
    """A single field-level validation message."""

    field: str
    message: str


def validate_profile(data: dict[str, Any]) -> list[FieldError]:
    """Check a profile submission and report every violation.

    Returns an empty list when ``data`` is valid.
    """
    try:
        ProfileSubmission.model_validate(data)
    except ValidationError as exc:
        return [
            FieldError(
                field=".".join(str(part) for part in error["loc"]) or "__root__",
                message=error["msg"],
            )
            for error in exc.errors()
        ]
    return []


class UserResponse(ORMModel):
    """Profile returned by the API, with the communities the user belongs to."""

    id: ExternalId
    name: str
    username: str
    image: str | None = None
    bio: str | None = None
    onboarded: bool
    created_at: Timestamp
    communities: list[CommunityBrief] = Field(default_factory=list)


class UserPage(BaseModel):
    """One page of the people directory."""

    users: list[UserSummary]
    is_next: bool


__all__ = [
    "ExternalId",
    "FieldError",
    "ProfileSubmission",
    "UserPage",
    "UserResponse",
    "UserSummary",
    "validate_profile",
]
