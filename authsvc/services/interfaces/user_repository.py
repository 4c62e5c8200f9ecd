"""
User repository interface.
The auth service depends on this, not on Redis.
"""

from abc import ABC, abstractmethod
from typing import Optional

from authsvc.models.user import User


class UserRepository(ABC):
    """
    Interface for user persistence.

    Implementations:
    - RedisUserRepository: user hash plus username index in Redis
    """

    @abstractmethod
    async def create_user(self, username: str, password_hash: str) -> User:
        """
        Atomically claim the username and store a new user.

        Raises:
            DuplicateUsernameError: another user already owns the username
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        pass
