"""
Pytest fixtures for the Redis store, services and HTTP client.

Redis is replaced by an in-memory fakeredis server that speaks the same
async client API, so each test gets an empty keyspace without a running
Redis. bcrypt runs at its minimum work factor to keep the suite fast.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis, FakeServer
from httpx import ASGITransport, AsyncClient

from authsvc.core.config import Settings
from authsvc.infrastructure.redis_client import UserStore
from authsvc.main import create_app
from authsvc.repositories.user_repository import RedisUserRepository
from authsvc.services.auth_service import AuthService
from authsvc.services.password_service import BcryptPasswordHasher

TEST_PASSWORD = "longenoughpassword"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        REDIS_URL="redis://localhost:6379/15",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def fake_server() -> FakeServer:
    """Fresh in-memory Redis server per test."""
    return FakeServer()


@pytest.fixture
def redis_client(fake_server: FakeServer) -> FakeAsyncRedis:
    return FakeAsyncRedis(server=fake_server, decode_responses=True)


@pytest_asyncio.fixture
async def store_outage(fake_server: FakeServer, redis_client: FakeAsyncRedis) -> None:
    """Simulate Redis going away: drop pooled connections and refuse new ones."""
    fake_server.connected = False
    await redis_client.connection_pool.disconnect()


@pytest_asyncio.fixture
async def store(settings: Settings, redis_client: FakeAsyncRedis) -> AsyncGenerator[UserStore, None]:
    store = UserStore(settings, client=redis_client)
    await store.connect()
    yield store
    await store.shutdown()


@pytest.fixture
def repository(store: UserStore) -> RedisUserRepository:
    return RedisUserRepository(store)


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def auth_service(repository: RedisUserRepository, hasher: BcryptPasswordHasher) -> AuthService:
    return AuthService(repository, hasher)


@pytest.fixture
def app(settings: Settings, store: UserStore, hasher: BcryptPasswordHasher):
    return create_app(settings=settings, store=store, hasher=hasher)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client over the ASGI app; the store is already connected by the fixture."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient) -> str:
    """Register 'alice' through the API and return the username."""
    response = await client.post("/register", json={
        "username": "alice",
        "password": TEST_PASSWORD,
    })
    assert response.status_code == 201
    return "alice"
