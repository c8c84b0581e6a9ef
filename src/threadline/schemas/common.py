"""Shared Pydantic schemas and field helpers."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field

from threadline.db.time import as_utc

# Users and communities are addressed by the identity provider's id, stored as `external_id`.
ExternalId = Annotated[str, Field(validation_alias=AliasChoices("external_id", "id"))]
Timestamp = Annotated[datetime, AfterValidator(as_utc)]


class ORMModel(BaseModel):
    """Base for response schemas read straight from ORM instances."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class UserSummary(ORMModel):
    """Projection of a user embedded in other payloads."""

    id: ExternalId
    name: str
    username: str
    image: str | None = None


class CommunityBrief(ORMModel):
    """Projection of a community embedded in other payloads."""

    id: ExternalId
    name: str
    username: str
    image: str | None = None


class OperationResult(BaseModel):
    """Acknowledgement returned by actions without a natural payload."""

    success: bool = Field(..., description="True when the action completed")
