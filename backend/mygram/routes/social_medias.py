"""
MyGram Backend - SocialMedia Route Handlers
============================================

What:  /socialmedias create, list, update and delete (bearer token required).
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.database import get_db_session
from mygram.dependencies import get_current_user_id, get_owner_cache
from mygram.schemas.common import ErrorResponse, MessageResponse
from mygram.schemas.social_media import (
    SocialMediaCreate,
    SocialMediaListItem,
    SocialMediaResponse,
    SocialMediaUpdate,
)
from mygram.services.owner_cache import OwnerSummaryCache
from mygram.services.social_media_service import social_media_service

router = APIRouter(
    prefix="/socialmedias",
    tags=["Social Medias"],
    dependencies=[Depends(get_current_user_id)],
    responses={
        400: {"description": "Invalid input or missing token", "model": ErrorResponse},
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
    },
)

OWNED_RESPONSES = {
    403: {"description": "Social media belongs to another user", "model": ErrorResponse},
    404: {"description": "Social media not found", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=SocialMediaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a social media link for the logged in user",
)
async def create_social_media(
    payload: SocialMediaCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SocialMediaResponse:
    social_media = await social_media_service.create(db, user_id, payload)
    return SocialMediaResponse.model_validate(social_media)


@router.get(
    "",
    response_model=List[SocialMediaListItem],
    summary="List every social media link with its owner",
)
async def list_social_medias(
    db: AsyncSession = Depends(get_db_session),
    owners: OwnerSummaryCache = Depends(get_owner_cache),
) -> List[SocialMediaListItem]:
    return await social_media_service.list_all(db, owners)


@router.put(
    "/{social_media_id}",
    response_model=SocialMediaResponse,
    responses=OWNED_RESPONSES,
    summary="Replace a social media link of the logged in user",
)
async def update_social_media(
    social_media_id: int,
    payload: SocialMediaUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SocialMediaResponse:
    social_media = await social_media_service.update(db, social_media_id, user_id, payload)
    return SocialMediaResponse.model_validate(social_media)


@router.delete(
    "/{social_media_id}",
    response_model=MessageResponse,
    responses=OWNED_RESPONSES,
    summary="Delete a social media link of the logged in user",
)
async def delete_social_media(
    social_media_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await social_media_service.delete(db, social_media_id, user_id)
    return MessageResponse(message="Your social media has been successfully deleted")
