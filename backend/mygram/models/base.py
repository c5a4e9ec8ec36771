"""
MyGram Backend - Shared Model Columns
======================================

What:  Mixins for the columns every table shares (id, timestamps) and for
       the owner reference of user-owned content.
How:   `OwnedMixin` exposes `owner_id`, the single capability the
       ownership-checked services depend on. Photo, Comment and
       SocialMedia all mix it in, so the authorization algorithm is
       written once (services/ownership.py).
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, declared_attr, mapped_column


def utcnow() -> datetime:
    """Timezone-aware current time; all timestamps are stored in UTC."""
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Integer primary key plus created/updated timestamps."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this row was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this row was last modified (UTC)",
    )


class OwnedMixin:
    """
    Owner reference for user-generated content.

    `user_id` is nullable only because deleting a user sets it to NULL on
    the content they left behind. New rows always get an owner and no
    update path ever changes it.
    """

    @declared_attr
    def user_id(cls) -> Mapped[Optional[int]]:
        return mapped_column(
            Integer,
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
            comment="Owning user; NULL after the owner deleted their account",
        )

    @property
    def owner_id(self) -> Optional[int]:
        return self.user_id
