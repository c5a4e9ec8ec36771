"""
MyGram Backend - Request-Scoped Lookup Cache
=============================================

What:  Memoizes lookups by integer id for the duration of one request.
How:   A plain dict in front of an async loader. A new cache is built for
       every request (see dependencies.get_owner_cache) and dropped with it;
       nothing is shared between requests.
Who:   List endpoints, which would otherwise look up the same owner (or, for
       comments, the same photo) once per row.
"""

from typing import Awaitable, Callable, Dict, Generic, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from mygram.repositories import PhotoRepository, UserRepository
from mygram.models import Photo
from mygram.schemas.common import OwnerSummary

T = TypeVar("T")


class RequestLookupCache(Generic[T]):
    """
    id → value memo over `loader`.

    Misses (loader returned None) are cached too, so a dangling id is only
    looked up once.
    """

    def __init__(self, loader: Callable[[int], Awaitable[Optional[T]]]):
        self._loader = loader
        self._values: Dict[int, Optional[T]] = {}
        self.loads = 0

    async def get(self, key: Optional[int]) -> Optional[T]:
        if key is None:
            return None
        if key not in self._values:
            self.loads += 1
            self._values[key] = await self._loader(key)
        return self._values[key]

    def __len__(self) -> int:
        return len(self._values)


class OwnerSummaryCache(RequestLookupCache[OwnerSummary]):
    """Owner summaries ({id, username, email}) keyed by user id."""

    def __init__(self, users: UserRepository):
        super().__init__(users.find_summary)

    @classmethod
    def for_session(cls, session: AsyncSession) -> "OwnerSummaryCache":
        return cls(UserRepository(session))


class PhotoCache(RequestLookupCache[Photo]):
    """Photos keyed by id, for embedding in comment listings."""

    def __init__(self, photos: PhotoRepository):
        super().__init__(photos.find_by_id)
