"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .password_hasher import PasswordHasher
from .user_repository import UserRepository

__all__ = ['PasswordHasher', 'UserRepository']
