"""Redis-backed user registration and login service."""

__version__ = "1.0.0"
