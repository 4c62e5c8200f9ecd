"""
Tests for the Redis user repository: storage layout, round trips,
username claims and tolerance of torn state.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from authsvc.core.errors import DuplicateUsernameError, StoreUnavailableError
from authsvc.repositories.user_repository import RedisUserRepository


@pytest.mark.asyncio
async def test_create_user_round_trip(repository: RedisUserRepository):
    created = await repository.create_user("alice", "$2b$04$digest")

    fetched = await repository.find_by_id(created.id)
    assert fetched == created
    assert fetched is not created
    assert fetched.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_storage_layout(repository: RedisUserRepository, redis_client):
    user = await repository.create_user("alice", "$2b$04$digest")

    assert await redis_client.get("username:alice") == user.id
    record = await redis_client.hgetall(f"user:{user.id}")
    assert record == {
        "id": user.id,
        "username": "alice",
        "passwordHash": "$2b$04$digest",
        "createdAt": user.created_at.isoformat(),
        "updatedAt": user.updated_at.isoformat(),
    }


@pytest.mark.asyncio
async def test_find_by_username(repository: RedisUserRepository):
    created = await repository.create_user("alice", "$2b$04$digest")
    assert await repository.find_by_username("alice") == created
    assert await repository.find_by_username("Alice") is None
    assert await repository.find_by_username("bob") is None


@pytest.mark.asyncio
async def test_find_by_id_missing(repository: RedisUserRepository):
    assert await repository.find_by_id("does-not-exist") is None


@pytest.mark.asyncio
async def test_username_exists(repository: RedisUserRepository):
    assert await repository.username_exists("alice") is False
    await repository.create_user("alice", "$2b$04$digest")
    assert await repository.username_exists("alice") is True


@pytest.mark.asyncio
async def test_duplicate_username_raises(repository: RedisUserRepository, redis_client):
    first = await repository.create_user("alice", "$2b$04$first")

    with pytest.raises(DuplicateUsernameError):
        await repository.create_user("alice", "$2b$04$second")

    # The original owner is untouched and the loser left nothing behind
    assert await redis_client.get("username:alice") == first.id
    keys = [key async for key in redis_client.scan_iter(match="user:*")]
    assert keys == [f"user:{first.id}"]


@pytest.mark.asyncio
async def test_concurrent_creates_have_one_winner(repository: RedisUserRepository, redis_client):
    results = await asyncio.gather(
        *[repository.create_user("carol", f"$2b$04$digest{i}") for i in range(5)],
        return_exceptions=True,
    )

    winners = [r for r in results if not isinstance(r, Exception)]
    losers = [r for r in results if isinstance(r, DuplicateUsernameError)]
    assert len(winners) == 1
    assert len(losers) == 4

    assert await redis_client.get("username:carol") == winners[0].id
    keys = [key async for key in redis_client.scan_iter(match="user:*")]
    assert keys == [f"user:{winners[0].id}"]


@pytest.mark.asyncio
async def test_dangling_index_reads_as_absent(repository: RedisUserRepository, redis_client):
    """Index entry without a user hash is treated as no user."""
    await redis_client.set("username:ghost", "missing-id")

    assert await repository.find_by_username("ghost") is None
    assert await repository.username_exists("ghost") is True


@pytest.mark.asyncio
async def test_incomplete_record_reads_as_absent(repository: RedisUserRepository, redis_client):
    await redis_client.hset("user:partial", mapping={"id": "partial", "username": "p"})
    assert await repository.find_by_id("partial") is None


@pytest.mark.asyncio
async def test_lost_claim_still_duplicate_when_cleanup_fails(
    repository: RedisUserRepository, store, monkeypatch
):
    """A failed delete of the loser's record must not turn the 409 into a 500."""
    await repository.create_user("alice", "$2b$04$first")
    monkeypatch.setattr(
        store,
        "delete_record",
        AsyncMock(side_effect=StoreUnavailableError("delete_record", "connection lost")),
    )

    with pytest.raises(DuplicateUsernameError):
        await repository.create_user("alice", "$2b$04$second")
    store.delete_record.assert_awaited_once()
