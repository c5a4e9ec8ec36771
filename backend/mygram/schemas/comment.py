"""
MyGram Backend - Comment Request/Response Schemas
==================================================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mygram.models.comment import MAX_MESSAGE_LENGTH
from mygram.schemas.common import OwnerSummary
from mygram.schemas.photo import PhotoResponse


class CommentCreate(BaseModel):
    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    photo_id: int = Field(gt=0, examples=[1])


class CommentUpdate(BaseModel):
    """Comment updates always replace the message."""

    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)


class CommentResponse(BaseModel):
    id: int
    message: str
    photo_id: int
    user_id: Optional[int]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommentListItem(CommentResponse):
    """Comment with its author's summary and the photo it was left on."""

    user: Optional[OwnerSummary] = None
    photo: Optional[PhotoResponse] = None
