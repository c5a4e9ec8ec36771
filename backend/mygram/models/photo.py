"""
MyGram Backend - Photo SQLAlchemy Model
========================================

What:  ORM model for the `photos` table.
Who:   PhotoRepository and PhotoService; CommentService embeds photos in
       comment listings.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import OwnedMixin, TimestampMixin


class Photo(TimestampMixin, OwnedMixin, Base):
    """A photo posted by a user. Only the URL is stored, never image bytes."""

    __tablename__ = "photos"

    title: Mapped[str] = mapped_column(Text, nullable=False)

    caption: Mapped[str] = mapped_column(Text, nullable=False, default="")

    photo_url: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
