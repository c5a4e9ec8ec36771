# Models package init
"""
MyGram Backend - ORM Models
============================

Importing this package registers every table on `Base.metadata`, which is
what Alembic autogenerate and `Database.create_all()` rely on.
"""

from mygram.models.base import OwnedMixin, TimestampMixin
from mygram.models.comment import Comment
from mygram.models.photo import Photo
from mygram.models.social_media import SocialMedia
from mygram.models.user import User

__all__ = [
    "Comment",
    "OwnedMixin",
    "Photo",
    "SocialMedia",
    "TimestampMixin",
    "User",
]
