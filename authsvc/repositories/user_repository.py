"""
Redis implementation of the user repository.

STORAGE LAYOUT
==============

  user:<id>            hash  {id, username, passwordHash, createdAt, updatedAt}
  username:<username>  string  <id>

The username key is the uniqueness index. It is claimed with SET NX in the
same MULTI/EXEC as the user hash write, so two registrations racing for
one username always produce exactly one winner.

A loser's hash still gets written (MULTI runs every queued command), under
the loser's own fresh id. We delete it straight away so no user hash is
left without an index entry pointing at it. If that delete fails the
failure is logged and the caller still gets DuplicateUsernameError.

Timestamps are stored as ISO-8601 strings with microseconds and a UTC
offset, which datetime.fromisoformat reads back without loss.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from authsvc.core.errors import DuplicateUsernameError, StoreError
from authsvc.core.logging import get_logger
from authsvc.infrastructure.redis_client import UserStore
from authsvc.models.user import User
from authsvc.services.interfaces.user_repository import UserRepository

logger = get_logger(__name__)

USER_KEY_PREFIX = "user:"
USERNAME_INDEX_PREFIX = "username:"

_FIELDS = ("id", "username", "passwordHash", "createdAt", "updatedAt")


def user_key(user_id: str) -> str:
    return f"{USER_KEY_PREFIX}{user_id}"


def username_index_key(username: str) -> str:
    return f"{USERNAME_INDEX_PREFIX}{username}"


def to_record(user: User) -> dict[str, str]:
    return {
        "id": user.id,
        "username": user.username,
        "passwordHash": user.password_hash,
        "createdAt": user.created_at.isoformat(),
        "updatedAt": user.updated_at.isoformat(),
    }


def from_record(fields: dict[str, str]) -> User:
    return User(
        id=fields["id"],
        username=fields["username"],
        password_hash=fields["passwordHash"],
        created_at=datetime.fromisoformat(fields["createdAt"]),
        updated_at=datetime.fromisoformat(fields["updatedAt"]),
    )


class RedisUserRepository(UserRepository):

    def __init__(self, store: UserStore):
        self.store = store

    async def create_user(self, username: str, password_hash: str) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

        claimed = await self.store.claim_and_write(
            index_key=username_index_key(username),
            owner_id=user.id,
            record_key=user_key(user.id),
            fields=to_record(user),
        )
        if not claimed:
            logger.info("username_claim_lost", username=username)
            try:
                await self.store.delete_record(user_key(user.id))
            except StoreError as e:
                logger.error("orphan_record_cleanup_failed", user_id=user.id, error=str(e))
            raise DuplicateUsernameError(username)

        logger.info("user_created", user_id=user.id, username=username)
        return user

    async def find_by_username(self, username: str) -> Optional[User]:
        user_id = await self.store.read_index(username_index_key(username))
        if user_id is None:
            return None

        user = await self._get_user_by_id(user_id)
        if user is None:
            logger.warning("username_index_dangling", username=username, user_id=user_id)
        return user

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self._get_user_by_id(user_id)

    async def username_exists(self, username: str) -> bool:
        return await self.store.read_index(username_index_key(username)) is not None

    async def _get_user_by_id(self, user_id: str) -> Optional[User]:
        fields = await self.store.read_record(user_key(user_id))
        if not fields:
            return None

        if any(name not in fields for name in _FIELDS):
            logger.warning("user_record_incomplete", user_id=user_id)
            return None

        try:
            return from_record(fields)
        except ValueError:
            logger.warning("user_record_unparseable", user_id=user_id)
            return None
