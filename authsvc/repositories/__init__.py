from .user_repository import RedisUserRepository

__all__ = ['RedisUserRepository']
