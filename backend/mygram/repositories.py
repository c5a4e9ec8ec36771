"""
MyGram Backend - Persistence Port (Repositories)
=================================================

What:  CRUD access to the four entity kinds over one request's AsyncSession.
How:   `Repository[ModelT]` implements create / find_by_id / find_all / save /
       delete once; subclasses add the user lookups and the relational
       clean-up that must accompany some deletes.
Who:   Services. Routes never touch a repository directly.

Error translation:
    unique constraint violation (users.username, users.email)
        → DuplicateIdentityError (session rolled back first so the request
          can still commit cleanly after the route answers)
    any other SQLAlchemyError during a write
        → DatabaseError (generic 500, details logged)

Relational integrity:
    Deleting a user sets user_id to NULL on their photos, comments and
    social medias; deleting a photo removes its comments. Both are issued as
    explicit statements so they hold on engines that do not enforce foreign
    keys (SQLite without the foreign_keys pragma).
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete as sql_delete
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.database import Base
from mygram.exceptions import DatabaseError, DuplicateIdentityError
from mygram.models import Comment, Photo, SocialMedia, User
from mygram.schemas.common import OwnerSummary

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

UNIQUE_VIOLATION_SQLSTATE = "23505"

# Range of a 32-bit INTEGER primary key (PostgreSQL int4)
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    True when an IntegrityError came from a unique constraint.

    PostgreSQL drivers expose SQLSTATE 23505 as `sqlstate` (asyncpg) or
    `pgcode` (psycopg); SQLite only reports it in the message text.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION_SQLSTATE
    return "UNIQUE constraint failed" in str(orig)


class Repository(Generic[ModelT]):
    """Generic CRUD over one mapped model."""

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def resource(self) -> str:
        return self.model.__tablename__

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise DuplicateIdentityError(context={"table": self.resource})
            logger.error("Integrity error on %s: %s", self.resource, e.orig)
            raise DatabaseError(context={"table": self.resource, "error_type": "IntegrityError"})
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Database error on %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(context={"table": self.resource, "error_type": type(e).__name__})

    async def create(self, entity: ModelT) -> ModelT:
        """Insert a new row; the generated id is available on return."""
        self.session.add(entity)
        await self._flush()
        return entity

    async def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        """None for unknown ids, including ids no INTEGER column can hold."""
        if not MIN_ID <= entity_id <= MAX_ID:
            return None
        return await self.session.get(self.model, entity_id)

    async def find_all(self) -> List[ModelT]:
        result = await self.session.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def save(self, entity: ModelT) -> ModelT:
        """
        Flush pending changes of an entity loaded through this session.

        The entity must already be attached; every write goes through the
        guarded `_flush` so constraint violations are translated.
        """
        await self._flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self._flush()


class UserRepository(Repository[User]):
    model = User

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_summary(self, user_id: int) -> Optional[OwnerSummary]:
        """Projection query: only id, username and email leave the table."""
        result = await self.session.execute(
            select(User.id, User.username, User.email).where(User.id == user_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return OwnerSummary(id=row.id, username=row.username, email=row.email)

    async def delete(self, entity: User) -> None:
        """Remove the user; their content stays behind with user_id = NULL."""
        for dependent in (Photo, Comment, SocialMedia):
            await self.session.execute(
                update(dependent)
                .where(dependent.user_id == entity.id)
                .values(user_id=None)
                .execution_options(synchronize_session="fetch")
            )
        await super().delete(entity)


class PhotoRepository(Repository[Photo]):
    model = Photo

    async def delete(self, entity: Photo) -> None:
        await self.session.execute(
            sql_delete(Comment)
            .where(Comment.photo_id == entity.id)
            .execution_options(synchronize_session="fetch")
        )
        await super().delete(entity)


class CommentRepository(Repository[Comment]):
    model = Comment


class SocialMediaRepository(Repository[SocialMedia]):
    model = SocialMedia
