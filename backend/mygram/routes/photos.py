"""
MyGram Backend - Photo Route Handlers
======================================

What:  /photos create, list, update and delete.
How:   Thin handlers: bind the body, resolve the acting user, delegate to
       PhotoService, pick the status code. Every route requires a bearer
       token (router-level dependency).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.database import get_db_session
from mygram.dependencies import get_current_user_id, get_owner_cache
from mygram.schemas.common import ErrorResponse, MessageResponse
from mygram.schemas.photo import PhotoCreate, PhotoListItem, PhotoResponse, PhotoUpdate
from mygram.services.owner_cache import OwnerSummaryCache
from mygram.services.photo_service import photo_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/photos",
    tags=["Photos"],
    dependencies=[Depends(get_current_user_id)],
    responses={
        400: {"description": "Invalid input or missing token", "model": ErrorResponse},
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
    },
)

OWNED_RESPONSES = {
    403: {"description": "Photo belongs to another user", "model": ErrorResponse},
    404: {"description": "Photo not found", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=PhotoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a photo owned by the logged in user",
)
async def create_photo(
    payload: PhotoCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> PhotoResponse:
    photo = await photo_service.create(db, user_id, payload)
    return PhotoResponse.model_validate(photo)


@router.get(
    "",
    response_model=List[PhotoListItem],
    summary="List every photo with its owner",
)
async def list_photos(
    db: AsyncSession = Depends(get_db_session),
    owners: OwnerSummaryCache = Depends(get_owner_cache),
) -> List[PhotoListItem]:
    return await photo_service.list_all(db, owners)


@router.put(
    "/{photo_id}",
    response_model=PhotoResponse,
    responses=OWNED_RESPONSES,
    summary="Update a photo of the logged in user",
    description="Empty title or photo_url keep their current values; caption is always replaced.",
)
async def update_photo(
    photo_id: int,
    payload: PhotoUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> PhotoResponse:
    photo = await photo_service.update(db, photo_id, user_id, payload)
    return PhotoResponse.model_validate(photo)


@router.delete(
    "/{photo_id}",
    response_model=MessageResponse,
    responses=OWNED_RESPONSES,
    summary="Delete a photo of the logged in user",
)
async def delete_photo(
    photo_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await photo_service.delete(db, photo_id, user_id)
    return MessageResponse(message="Your photo has been successfully deleted")
