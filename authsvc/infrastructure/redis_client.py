"""
Redis-backed user store.

Wraps the handful of Redis primitives the user repository needs
(conditional set, hash write, hash read, plain get) behind methods that
speak in index keys and record keys. Separated from business logic for
clean architecture.

The client is constructed per application and passed in, never held in a
module-level singleton. Transport failures are translated into StoreError
subclasses and are not retried here.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from authsvc.core.config import Settings
from authsvc.core.errors import StoreError, StoreUnavailableError
from authsvc.core.logging import get_logger
from authsvc.core.metrics import record_store_error

logger = get_logger(__name__)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Turn redis-py exceptions into the store error taxonomy."""
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError) as e:
        record_store_error(operation)
        logger.error("store_unavailable", operation=operation, error=str(e))
        raise StoreUnavailableError(operation, str(e)) from e
    except RedisError as e:
        record_store_error(operation)
        logger.error("store_error", operation=operation, error=str(e))
        raise StoreError(operation, str(e)) from e


class UserStore:
    """
    Async Redis adapter used by the user repository.

    Pass `client` to reuse an existing connection (tests hand in an
    in-memory fake); otherwise one is built from REDIS_URL on connect().
    """

    def __init__(self, settings: Settings, client: Optional[redis.Redis] = None):
        self._settings = settings
        self._client: Optional[redis.Redis] = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise StoreUnavailableError("client", "store is not connected")
        return self._client

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Create the client if needed and check it answers. Safe to call twice."""
        if self._client is None:
            self._client = redis.from_url(
                self._settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=self._settings.REDIS_CONNECT_TIMEOUT,
                socket_timeout=self._settings.REDIS_SOCKET_TIMEOUT,
            )

        with _translate_errors("connect"):
            await self._client.ping()
        logger.info("redis_connected")

    async def disconnect(self) -> None:
        """Close the client. A no-op when already disconnected."""
        if self._client is None:
            return

        client, self._client = self._client, None
        with _translate_errors("disconnect"):
            await client.aclose()
        logger.info("redis_disconnected")

    async def shutdown(self) -> None:
        """
        Close the client on application shutdown. Never raises.

        Tries a clean close first; if that fails, drops every pooled
        connection, in use or not.
        """
        if self._client is None:
            return

        client, self._client = self._client, None
        try:
            await client.aclose()
            logger.info("redis_disconnected")
            return
        except Exception as e:
            logger.warning("redis_close_failed", error=str(e))

        try:
            await client.connection_pool.disconnect(inuse_connections=True)
            logger.info("redis_force_disconnected")
        except Exception as e:
            logger.error("redis_force_disconnect_failed", error=str(e))

    async def ping(self) -> bool:
        """Readiness check. Returns False instead of raising."""
        if self._client is None:
            return False
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("redis_ping_failed", error=str(e))
            return False

    async def claim_and_write(
        self,
        index_key: str,
        owner_id: str,
        record_key: str,
        fields: dict[str, str],
    ) -> bool:
        """
        Claim `index_key` for `owner_id` and write the record in one MULTI/EXEC.

        The batch always runs both commands. Only the SET NX reply says
        whether this caller won the claim, so that reply is what we return.
        """
        with _translate_errors("claim_and_write"):
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.set(index_key, owner_id, nx=True)
                pipe.hset(record_key, mapping=fields)
                claimed, _ = await pipe.execute()
        return bool(claimed)

    async def read_record(self, record_key: str) -> Optional[dict[str, str]]:
        with _translate_errors("read_record"):
            fields = await self.client.hgetall(record_key)
        return fields or None

    async def read_index(self, index_key: str) -> Optional[str]:
        with _translate_errors("read_index"):
            return await self.client.get(index_key)

    async def delete_record(self, record_key: str) -> None:
        with _translate_errors("delete_record"):
            await self.client.delete(record_key)
