"""
MyGram Backend - Ownership-Checked CRUD Core
=============================================

What:  The one implementation of create / list / update / delete for
       user-owned content (photos, comments, social medias).
How:   `OwnedResourceService` is generic over the model. Subclasses name
       their repository and supply two hooks:

           _build(data)               → new, unsaved entity from a create DTO
           _apply_update(entity, data) → patch semantics for that kind

       Everything else, in particular the authorization check, lives here.

Authorization protocol (update and delete):
    ┌────────────────┐  None   ┌───────────────┐
    │ find_by_id(id) │────────▶│ NotFoundError │  404
    └───────┬────────┘         └───────────────┘
            │ entity
    ┌───────▼──────────────────┐  ≠  ┌────────────────┐
    │ entity.owner_id == actor │────▶│ ForbiddenError │  403
    └───────┬──────────────────┘     └────────────────┘
            │ =
        mutate, stamp updated_at, save

    An entity that exists but belongs to someone else is always reported as
    ForbiddenError, never as NotFoundError.

Concurrency:
    Each operation is a single read-then-write in the request's session.
    There is no optimistic locking; concurrent updates to the same row are
    last-writer-wins.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from mygram.exceptions import ForbiddenError, NotFoundError
from mygram.models.base import OwnedMixin, utcnow
from mygram.repositories import Repository, UserRepository
from mygram.services.owner_cache import OwnerSummaryCache

logger = logging.getLogger(__name__)

OwnedT = TypeVar("OwnedT", bound=OwnedMixin)


class OwnedResourceService(ABC, Generic[OwnedT]):
    """
    Base service for content whose mutations are gated by ownership.

    Contract for subclasses:
        - `resource` and `repository_class` name the entity kind
        - `_build`, `_apply_update` and `_list_item` are the only
          per-kind behaviour; they never touch the session
    """

    #: Singular resource name used in messages ("photo", "comment", ...)
    resource: str = "resource"
    repository_class: Type[Repository] = Repository

    def repository(self, db: AsyncSession) -> Repository:
        return self.repository_class(db)

    # ── Hooks ─────────────────────────────────────────────────────────────

    @abstractmethod
    def _build(self, data: Any) -> OwnedT:
        """New, unsaved entity from a create DTO. Owner and timestamps are set by `create`."""
        ...

    @abstractmethod
    def _apply_update(self, entity: OwnedT, data: Any) -> None:
        """Patch `entity` in place from an update DTO."""
        ...

    @abstractmethod
    def _list_item(self, entity: OwnedT, owner: Any) -> Any:
        """Response item for listings, enriched with the owner summary (or None)."""
        ...

    async def _require_user(self, db: AsyncSession, acting_user_id: int) -> None:
        """
        Confirm the token subject still has an account.

        A token outlives a deleted account by up to its lifetime; content
        created with it would otherwise reference a missing user.
        """
        if await UserRepository(db).find_by_id(acting_user_id) is None:
            logger.warning("Token subject %s has no account", acting_user_id)
            raise NotFoundError(resource="user", resource_id=acting_user_id)

    # ── Authorization ─────────────────────────────────────────────────────

    async def get_owned(self, db: AsyncSession, entity_id: int, acting_user_id: int) -> OwnedT:
        """
        Load `entity_id` and confirm `acting_user_id` owns it.

        Raises:
            NotFoundError:  no row with that id
            ForbiddenError: the row exists and belongs to another user
                            (or to nobody, after its owner was deleted)
        """
        entity = await self.repository(db).find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(resource=self.resource, resource_id=entity_id)
        if entity.owner_id != acting_user_id:
            logger.warning(
                "User %s attempted to modify %s %s owned by %s",
                acting_user_id, self.resource, entity_id, entity.owner_id,
            )
            raise ForbiddenError(
                context={"resource": self.resource, "resource_id": entity_id},
            )
        return entity

    # ── Operations ────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, acting_user_id: int, data: Any) -> OwnedT:
        """
        Persist a new entity owned by `acting_user_id`.

        Raises:
            NotFoundError: the acting user no longer exists
        """
        await self._require_user(db, acting_user_id)
        entity = self._build(data)
        now = utcnow()
        entity.user_id = acting_user_id
        entity.created_at = now
        entity.updated_at = now
        entity = await self.repository(db).create(entity)
        logger.info("User %s created %s %s", acting_user_id, self.resource, entity.id)
        return entity

    async def list_all(self, db: AsyncSession, owners: OwnerSummaryCache) -> List[Any]:
        """Every entity of this kind, each enriched with its owner's summary."""
        entities = await self.repository(db).find_all()
        items = []
        for entity in entities:
            owner = await owners.get(entity.owner_id)
            items.append(self._list_item(entity, owner))
        logger.debug(
            "Listed %d %s rows with %d owner lookups", len(items), self.resource, owners.loads
        )
        return items

    async def update(
        self, db: AsyncSession, entity_id: int, acting_user_id: int, data: Any
    ) -> OwnedT:
        entity = await self.get_owned(db, entity_id, acting_user_id)
        self._apply_update(entity, data)
        entity.updated_at = utcnow()
        entity = await self.repository(db).save(entity)
        logger.info("User %s updated %s %s", acting_user_id, self.resource, entity_id)
        return entity

    async def delete(self, db: AsyncSession, entity_id: int, acting_user_id: int) -> None:
        entity = await self.get_owned(db, entity_id, acting_user_id)
        await self.repository(db).delete(entity)
        logger.info("User %s deleted %s %s", acting_user_id, self.resource, entity_id)
