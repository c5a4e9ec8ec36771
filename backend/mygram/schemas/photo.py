"""
MyGram Backend - Photo Request/Response Schemas
================================================

What:  API contract for /photos.

Create:  title required, caption optional, photo_url required and a
         well-formed URL.
Update:  empty title / photo_url keep the stored values; caption is always
         replaced (an empty caption clears it).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from mygram.schemas.common import OwnerSummary, ensure_url


class PhotoCreate(BaseModel):
    title: str = Field(min_length=1)
    caption: str = Field(default="")
    photo_url: str = Field(
        min_length=1,
        examples=["https://subdomain.domain.dom.ge/path?arg=1"],
    )

    @field_validator("photo_url")
    @classmethod
    def validate_photo_url(cls, v: str) -> str:
        return ensure_url(v)


class PhotoUpdate(BaseModel):
    title: str = Field(default="")
    caption: str = Field(default="")
    photo_url: str = Field(default="")

    @field_validator("photo_url")
    @classmethod
    def validate_photo_url(cls, v: str) -> str:
        if v == "":
            return v
        return ensure_url(v)


class PhotoResponse(BaseModel):
    id: int = Field(description="Photo ID")
    title: str
    caption: str
    photo_url: str
    user_id: Optional[int] = Field(description="Owner; null once the owner deleted their account")
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PhotoListItem(PhotoResponse):
    """Photo enriched with its owner's public summary."""

    user: Optional[OwnerSummary] = None
