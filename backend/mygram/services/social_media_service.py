"""
MyGram Backend - SocialMedia Service
=====================================

What:  Hooks for social media links. Updates replace both name and URL.
"""

from typing import Optional

from mygram.models import SocialMedia
from mygram.repositories import SocialMediaRepository
from mygram.schemas.common import OwnerSummary
from mygram.schemas.social_media import (
    SocialMediaCreate,
    SocialMediaListItem,
    SocialMediaResponse,
    SocialMediaUpdate,
)
from mygram.services.ownership import OwnedResourceService


class SocialMediaService(OwnedResourceService[SocialMedia]):
    resource = "social media"
    repository_class = SocialMediaRepository

    def _build(self, data: SocialMediaCreate) -> SocialMedia:
        return SocialMedia(name=data.name, social_media_url=data.social_media_url)

    def _apply_update(self, social_media: SocialMedia, data: SocialMediaUpdate) -> None:
        social_media.name = data.name
        social_media.social_media_url = data.social_media_url

    def _list_item(
        self, social_media: SocialMedia, owner: Optional[OwnerSummary]
    ) -> SocialMediaListItem:
        return SocialMediaListItem(
            **SocialMediaResponse.model_validate(social_media).model_dump(),
            user=owner,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
social_media_service = SocialMediaService()
