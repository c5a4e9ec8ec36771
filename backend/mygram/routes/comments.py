"""
MyGram Backend - Comment Route Handlers
========================================

What:  /comments create, list, update and delete (bearer token required).
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.database import get_db_session
from mygram.dependencies import get_current_user_id, get_owner_cache
from mygram.schemas.comment import (
    CommentCreate,
    CommentListItem,
    CommentResponse,
    CommentUpdate,
)
from mygram.schemas.common import ErrorResponse, MessageResponse
from mygram.services.comment_service import comment_service
from mygram.services.owner_cache import OwnerSummaryCache

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
    dependencies=[Depends(get_current_user_id)],
    responses={
        400: {"description": "Invalid input or missing token", "model": ErrorResponse},
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
    },
)

OWNED_RESPONSES = {
    403: {"description": "Comment belongs to another user", "model": ErrorResponse},
    404: {"description": "Comment not found", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Photo not found", "model": ErrorResponse}},
    summary="Comment on a photo",
)
async def create_comment(
    payload: CommentCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    comment = await comment_service.create(db, user_id, payload)
    return CommentResponse.model_validate(comment)


@router.get(
    "",
    response_model=List[CommentListItem],
    summary="List every comment with its author and photo",
)
async def list_comments(
    db: AsyncSession = Depends(get_db_session),
    owners: OwnerSummaryCache = Depends(get_owner_cache),
) -> List[CommentListItem]:
    return await comment_service.list_all(db, owners)


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    responses=OWNED_RESPONSES,
    summary="Replace the message of a comment of the logged in user",
)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    comment = await comment_service.update(db, comment_id, user_id, payload)
    return CommentResponse.model_validate(comment)


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    responses=OWNED_RESPONSES,
    summary="Delete a comment of the logged in user",
)
async def delete_comment(
    comment_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await comment_service.delete(db, comment_id, user_id)
    return MessageResponse(message="Your comment has been successfully deleted")
