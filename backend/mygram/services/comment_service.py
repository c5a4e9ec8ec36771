"""
MyGram Backend - Comment Service
=================================

What:  Comment-specific hooks for the ownership-checked CRUD core.
How:   Creation first checks that the target photo exists (NotFoundError
       otherwise). Updates always replace the message. Listings embed the
       author summary and the commented photo, both memoized per request.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mygram.exceptions import NotFoundError
from mygram.models import Comment, Photo
from mygram.repositories import CommentRepository, PhotoRepository
from mygram.schemas.comment import (
    CommentCreate,
    CommentListItem,
    CommentResponse,
    CommentUpdate,
)
from mygram.schemas.common import OwnerSummary
from mygram.schemas.photo import PhotoResponse
from mygram.services.owner_cache import OwnerSummaryCache, PhotoCache
from mygram.services.ownership import OwnedResourceService

logger = logging.getLogger(__name__)


class CommentService(OwnedResourceService[Comment]):
    resource = "comment"
    repository_class = CommentRepository

    def _build(self, data: CommentCreate) -> Comment:
        return Comment(message=data.message, photo_id=data.photo_id)

    def _apply_update(self, comment: Comment, data: CommentUpdate) -> None:
        comment.message = data.message

    def _list_item(
        self,
        comment: Comment,
        owner: Optional[OwnerSummary],
        photo: Optional[Photo] = None,
    ) -> CommentListItem:
        return CommentListItem(
            **CommentResponse.model_validate(comment).model_dump(),
            user=owner,
            photo=PhotoResponse.model_validate(photo) if photo is not None else None,
        )

    async def create(self, db: AsyncSession, acting_user_id: int, data: CommentCreate) -> Comment:
        photo = await PhotoRepository(db).find_by_id(data.photo_id)
        if photo is None:
            raise NotFoundError(resource="photo", resource_id=data.photo_id)
        return await super().create(db, acting_user_id, data)

    async def list_all(self, db: AsyncSession, owners: OwnerSummaryCache) -> List[CommentListItem]:
        comments = await self.repository(db).find_all()
        photos = PhotoCache(PhotoRepository(db))
        items = []
        for comment in comments:
            owner = await owners.get(comment.owner_id)
            photo = await photos.get(comment.photo_id)
            items.append(self._list_item(comment, owner, photo))
        logger.debug(
            "Listed %d comments with %d owner and %d photo lookups",
            len(items), owners.loads, photos.loads,
        )
        return items


# ── Singleton Instance ────────────────────────────────────────────────────
comment_service = CommentService()
