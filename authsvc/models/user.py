"""
User domain model.

Plain frozen dataclasses: the repository builds a fresh instance on every
read, so no caller can mutate a User another caller is holding.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    id: str
    username: str
    password_hash: str
    created_at: datetime
    updated_at: datetime

    def __repr__(self) -> str:
        # Keep the digest out of logs and tracebacks
        return f"<User(id={self.id}, username={self.username})>"


@dataclass(frozen=True)
class AuthResult:
    """What register and login hand back to the HTTP layer."""

    username: str
