"""
MyGram Backend - User Identity Service
=======================================

What:  Registration, login, profile update and account deletion.
How:   Holds the two injected security capabilities (PasswordHasher,
       TokenService); receives the request's database session per call.
Who:   Constructed once in create_app() and reached by routes through
       dependencies.get_user_service.

Error Handling Strategy:
    - DuplicateIdentityError surfaces from the repository on a unique
      username/email collision (register and update_profile).
    - authenticate() merges "no such email" and "wrong password" into one
      InvalidCredentialsError, and both paths run the same hash check so
      response time does not tell them apart either.
"""

import logging
import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from mygram.exceptions import InvalidCredentialsError, NotFoundError
from mygram.models import User
from mygram.models.base import utcnow
from mygram.repositories import UserRepository
from mygram.schemas.user import UserRegister, UserUpdate
from mygram.security.passwords import PasswordHasher
from mygram.security.tokens import TokenService

logger = logging.getLogger(__name__)


class UserService:
    """Identity operations for user accounts."""

    def __init__(self, hasher: PasswordHasher, tokens: TokenService):
        self.hasher = hasher
        self.tokens = tokens
        # Verified against when the email is unknown so both login failures
        # cost one PBKDF2 derivation
        self._dummy_hash = hasher.hash(secrets.token_hex(16))

    async def register(self, db: AsyncSession, data: UserRegister) -> User:
        """
        Create an account with a hashed password.

        Raises:
            DuplicateIdentityError: username or email already registered
        """
        now = utcnow()
        user = User(
            username=data.username,
            email=data.email,
            password=self.hasher.hash(data.password),
            age=data.age,
            created_at=now,
            updated_at=now,
        )
        user = await UserRepository(db).create(user)
        logger.info("Registered user %s", user.id)
        return user

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> str:
        """Return a fresh bearer token for valid credentials."""
        user = await UserRepository(db).find_by_email(email)
        stored_hash = user.password if user is not None else self._dummy_hash
        if not self.hasher.verify(password, stored_hash) or user is None:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()
        logger.info("User %s logged in", user.id)
        return self.tokens.issue(user.id)

    async def _get(self, db: AsyncSession, user_id: int) -> User:
        user = await UserRepository(db).find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user

    async def update_profile(self, db: AsyncSession, user_id: int, data: UserUpdate) -> User:
        """Change username and/or email; empty fields keep their current value."""
        user = await self._get(db, user_id)
        if data.username:
            user.username = data.username
        if data.email:
            user.email = data.email
        user.updated_at = utcnow()
        user = await UserRepository(db).save(user)
        logger.info("Updated profile of user %s", user_id)
        return user

    async def delete_self(self, db: AsyncSession, user_id: int) -> None:
        """Remove the account; the user's content is kept with no owner."""
        user = await self._get(db, user_id)
        await UserRepository(db).delete(user)
        logger.info("Deleted user %s", user_id)
