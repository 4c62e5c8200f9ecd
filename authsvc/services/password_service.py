"""
Password hashing service using bcrypt.

bcrypt is CPU-bound on purpose, so both hash and verify run in a worker
thread to keep the event loop free for other requests.

bcrypt only uses the first 72 bytes of a password, and bcrypt 5 refuses
longer input outright. The API accepts up to 100 characters (which can be
up to 400 UTF-8 bytes), so the encoded password is cut to 72 bytes before
both hashing and checking. Two passwords sharing their first 72 bytes
therefore verify against each other.
"""

import asyncio
import time

import bcrypt

from authsvc.core.metrics import password_hash_latency
from authsvc.services.interfaces.password_hasher import PasswordHasher

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    """
    Salted bcrypt hashing with a configurable work factor.

    >>> hasher = BcryptPasswordHasher(rounds=4)
    >>> digest = asyncio.run(hasher.hash("my_secure_password"))
    >>> asyncio.run(hasher.verify("my_secure_password", digest))
    True
    """

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    async def hash(self, password: str) -> str:
        start = time.perf_counter()
        digest = await asyncio.to_thread(self._hash_sync, password)
        password_hash_latency.labels(operation="hash").observe(time.perf_counter() - start)
        return digest

    async def verify(self, password: str, password_hash: str) -> bool:
        start = time.perf_counter()
        result = await asyncio.to_thread(self._verify_sync, password, password_hash)
        password_hash_latency.labels(operation="verify").observe(time.perf_counter() - start)
        return result

    def _hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    @staticmethod
    def _verify_sync(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Invalid hash format
            return False
