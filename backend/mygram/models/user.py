"""
MyGram Backend - User SQLAlchemy Model
=======================================

What:  ORM model for the `users` table.
Who:   UserRepository (CRUD, email lookup, owner summaries), UserService.

Table Design:
    - username, email: unbounded text with unique indexes; the database is the authority on
      uniqueness and the repository translates its violation into
      DuplicateIdentityError.
    - password: PBKDF2 hash string, never the raw password and never
      serialized in a response schema.
    - Dependent photos, comments and social medias reference users.id with
      ON DELETE SET NULL.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import TimestampMixin


class User(TimestampMixin, Base):
    """A registered account."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        index=True,
    )

    email: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        index=True,
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Salted one-way hash of the password",
    )

    age: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
