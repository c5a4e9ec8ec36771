"""
MyGram Backend - Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own in-memory SQLite database (aiosqlite +
       StaticPool), so services and routes run against real SQL without a
       PostgreSQL server.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings pointing at sqlite+aiosqlite:///:memory:
    ├── database: Database with all tables created
    │   └── db_session: AsyncSession for service-level tests
    ├── user_service: UserService with a cheap PasswordHasher
    ├── create_user: factory that registers and commits a user
    ├── app: FastAPI app from create_app(test_settings), tables created
    │   └── client: HTTPX AsyncClient over ASGITransport
    └── auth_headers: factory that registers + logs in via the API
"""

import os

# Override settings for testing BEFORE any mygram imports
# mygram.main builds a module-level app from the environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-for-mygram-test-suite"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mygram.config import Settings
from mygram.database import Database
from mygram.main import create_app
from mygram.schemas.user import UserRegister
from mygram.security.passwords import PasswordHasher
from mygram.security.tokens import TokenService
from mygram.services.user_service import UserService

TEST_JWT_SECRET = "test-secret-key-for-mygram-test-suite"
DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_JWT_SECRET,
        password_hash_iterations=1_000,
        log_level="WARNING",
    )


# ══════════════════════════════════════════════════════════════════════════
# Service-Level Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(test_settings):
    db = Database(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """
    A session on a fresh database.

    Repositories only flush; tests commit explicitly where a later step
    could roll the session back (duplicate identity checks).
    """
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def token_service():
    return TokenService(secret=TEST_JWT_SECRET)


@pytest.fixture
def user_service(token_service):
    return UserService(hasher=PasswordHasher(iterations=1_000), tokens=token_service)


@pytest.fixture
def create_user(db_session, user_service):
    """
    Factory registering a user through UserService.

    Usage:
        alice = await create_user("alice")
    """

    async def _create(username: str, email: str = None, password: str = DEFAULT_PASSWORD, age: int = 20):
        user = await user_service.register(
            db_session,
            UserRegister(
                username=username,
                email=email or f"{username}@example.com",
                password=password,
                age=age,
            ),
        )
        await db_session.commit()
        return user

    return _create


# ══════════════════════════════════════════════════════════════════════════
# API-Level Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def app(test_settings):
    """
    FastAPI application with its own in-memory database.

    ASGITransport does not run the lifespan, so tables are created here.
    """
    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def client(app):
    """
    Async HTTP client routed directly into the app.

    Usage:
        async def test_health(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(client):
    """
    Factory that registers a user over HTTP, logs in and returns the
    Authorization header dict for that user.
    """

    async def _login(username: str, email: str = None, password: str = DEFAULT_PASSWORD):
        email = email or f"{username}@example.com"
        response = await client.post(
            "/users/register",
            json={"username": username, "email": email, "password": password, "age": 20},
        )
        assert response.status_code == 201, response.text
        response = await client.post("/users/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
