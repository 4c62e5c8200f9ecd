"""
Password hashing interface.
Lets the auth service stay independent of the hashing algorithm.
"""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """
    Interface for one-way password hashing.

    Implementations:
    - BcryptPasswordHasher: salted bcrypt with a configurable work factor
    """

    @abstractmethod
    async def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Every call must use a fresh random salt, so hashing the same
        password twice yields two different digests.
        """
        pass

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a plaintext password against a stored digest.

        Returns:
            True if the password matches
            False on mismatch or on a malformed digest
        """
        pass
