"""
MyGram Backend - Comment SQLAlchemy Model
==========================================

What:  ORM model for the `comments` table.

Constraints:
    - message is bounded at MAX_MESSAGE_LENGTH characters (schema enforces
      the same bound before the row is written)
    - photo_id cascades: comments disappear with their photo
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import OwnedMixin, TimestampMixin

MAX_MESSAGE_LENGTH = 8192


class Comment(TimestampMixin, OwnedMixin, Base):
    """A message left by a user on a photo."""

    __tablename__ = "comments"

    message: Mapped[str] = mapped_column(String(MAX_MESSAGE_LENGTH), nullable=False)

    photo_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("photos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, photo_id={self.photo_id}, user_id={self.user_id})>"
