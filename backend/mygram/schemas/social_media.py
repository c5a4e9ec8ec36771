"""
MyGram Backend - SocialMedia Request/Response Schemas
======================================================

Create and update share the same rules: both fields required. Updates
replace both fields.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mygram.models.social_media import MAX_FIELD_LENGTH
from mygram.schemas.common import OwnerSummary


class SocialMediaCreate(BaseModel):
    name: str = Field(min_length=1, max_length=MAX_FIELD_LENGTH)
    social_media_url: str = Field(
        min_length=1,
        max_length=MAX_FIELD_LENGTH,
        examples=["https://subdomain.domain.dom.ge/path"],
    )


class SocialMediaUpdate(SocialMediaCreate):
    pass


class SocialMediaResponse(BaseModel):
    id: int
    name: str
    social_media_url: str
    user_id: Optional[int]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SocialMediaListItem(SocialMediaResponse):
    user: Optional[OwnerSummary] = None
