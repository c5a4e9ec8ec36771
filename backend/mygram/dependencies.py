"""
MyGram Backend - FastAPI Dependencies
======================================

What:  Per-request collaborators injected into route handlers.

    get_current_user_id  → acting user id from the bearer token
    get_owner_cache      → fresh OwnerSummaryCache for this request only
    get_user_service     → the application's UserService

Application-wide objects (Database, TokenService, UserService) are built
once in create_app() and read from `request.app.state`; no module-level
instance is consulted here.
"""

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.database import get_db_session
from mygram.security.tokens import TokenService
from mygram.services.owner_cache import OwnerSummaryCache
from mygram.services.user_service import UserService


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """
    Resolve the acting identity of an authenticated route.

    Raises MissingTokenError / InvalidTokenError / TokenExpiredError, which
    the global handlers turn into 400 / 401 / 401.
    """
    user_id = tokens.verify_header(authorization)
    request.state.user_id = user_id
    return user_id


async def get_owner_cache(
    db: AsyncSession = Depends(get_db_session),
) -> OwnerSummaryCache:
    """A new, empty owner cache for each request that lists content."""
    return OwnerSummaryCache.for_session(db)
