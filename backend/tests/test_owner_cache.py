"""
MyGram Backend - Request Lookup Cache Tests
============================================

What we test:
    ✅ Repeated keys hit the loader once
    ✅ Misses are cached; None keys never reach the loader
    ✅ OwnerSummaryCache projects users to {id, username, email}
"""

from unittest.mock import AsyncMock

import pytest

from mygram.schemas.common import OwnerSummary
from mygram.services.owner_cache import OwnerSummaryCache, RequestLookupCache


class TestRequestLookupCache:
    @pytest.mark.asyncio
    async def test_loader_called_once_per_key(self):
        loader = AsyncMock(side_effect=lambda key: f"value-{key}")
        cache = RequestLookupCache(loader)

        assert await cache.get(1) == "value-1"
        assert await cache.get(1) == "value-1"
        assert await cache.get(2) == "value-2"

        assert loader.await_count == 2
        assert cache.loads == 2
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_misses_are_cached(self):
        loader = AsyncMock(return_value=None)
        cache = RequestLookupCache(loader)

        assert await cache.get(5) is None
        assert await cache.get(5) is None
        loader.assert_awaited_once_with(5)

    @pytest.mark.asyncio
    async def test_none_key_skips_loader(self):
        loader = AsyncMock()
        cache = RequestLookupCache(loader)

        assert await cache.get(None) is None
        loader.assert_not_awaited()


class TestOwnerSummaryCache:
    @pytest.mark.asyncio
    async def test_projects_user_summary(self, db_session, create_user):
        alice = await create_user("alice")
        cache = OwnerSummaryCache.for_session(db_session)

        summary = await cache.get(alice.id)

        assert summary == OwnerSummary(id=alice.id, username="alice", email="alice@example.com")
        assert await cache.get(999) is None

    @pytest.mark.asyncio
    async def test_caches_are_not_shared(self, db_session, create_user):
        alice = await create_user("alice")
        first = OwnerSummaryCache.for_session(db_session)
        second = OwnerSummaryCache.for_session(db_session)

        await first.get(alice.id)
        await second.get(alice.id)

        assert first.loads == 1
        assert second.loads == 1
