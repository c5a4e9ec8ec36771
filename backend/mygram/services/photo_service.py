"""
MyGram Backend - Photo Service
===============================

What:  Photo-specific hooks for the ownership-checked CRUD core.

Update semantics:
    title      empty → keep stored title
    photo_url  empty → keep stored URL
    caption    always replaced
"""

from typing import Optional

from mygram.models import Photo
from mygram.repositories import PhotoRepository
from mygram.schemas.common import OwnerSummary
from mygram.schemas.photo import PhotoCreate, PhotoListItem, PhotoResponse, PhotoUpdate
from mygram.services.ownership import OwnedResourceService


class PhotoService(OwnedResourceService[Photo]):
    resource = "photo"
    repository_class = PhotoRepository

    def _build(self, data: PhotoCreate) -> Photo:
        return Photo(title=data.title, caption=data.caption, photo_url=data.photo_url)

    def _apply_update(self, photo: Photo, data: PhotoUpdate) -> None:
        if data.title:
            photo.title = data.title
        if data.photo_url:
            photo.photo_url = data.photo_url
        photo.caption = data.caption

    def _list_item(self, photo: Photo, owner: Optional[OwnerSummary]) -> PhotoListItem:
        return PhotoListItem(
            **PhotoResponse.model_validate(photo).model_dump(),
            user=owner,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
photo_service = PhotoService()
