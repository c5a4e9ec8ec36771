"""
MyGram Backend - SocialMedia SQLAlchemy Model
==============================================

What:  ORM model for the `social_medias` table (a user's external profile links).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import OwnedMixin, TimestampMixin

MAX_FIELD_LENGTH = 8192


class SocialMedia(TimestampMixin, OwnedMixin, Base):
    __tablename__ = "social_medias"

    name: Mapped[str] = mapped_column(String(MAX_FIELD_LENGTH), nullable=False)

    social_media_url: Mapped[str] = mapped_column(String(MAX_FIELD_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"<SocialMedia(id={self.id}, user_id={self.user_id}, name='{self.name}')>"
