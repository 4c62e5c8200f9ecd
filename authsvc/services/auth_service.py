"""
Authentication service handling user registration and login.

Depends only on the UserRepository and PasswordHasher interfaces, so it
knows nothing about Redis or bcrypt.
"""

from typing import Optional

from authsvc.core.errors import ConflictError, DuplicateUsernameError, UnauthorizedError
from authsvc.core.logging import get_logger
from authsvc.core.metrics import record_login, record_registration
from authsvc.models.user import AuthResult
from authsvc.services.interfaces.password_hasher import PasswordHasher
from authsvc.services.interfaces.user_repository import UserRepository

logger = get_logger(__name__)

# Verified against when the username is unknown, so that path costs the
# same hash check as a wrong password does.
_DUMMY_PASSWORD = "timing-equalization-placeholder"


class AuthService:

    def __init__(self, repository: UserRepository, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher
        self._dummy_hash: Optional[str] = None

    async def register(self, username: str, password: str) -> AuthResult:
        """
        Register a new user with a hashed password.
        Raises ConflictError if the username is already taken.
        """
        # Cheap early exit; the atomic claim in create_user is what decides races
        if await self.repository.username_exists(username):
            raise self._registration_conflict(username)

        password_hash = await self.hasher.hash(password)

        try:
            user = await self.repository.create_user(username, password_hash)
        except DuplicateUsernameError as e:
            raise self._registration_conflict(username) from e

        record_registration("success")
        logger.info("user_registered", user_id=user.id, username=user.username)
        return AuthResult(username=user.username)

    async def login(self, username: str, password: str) -> AuthResult:
        """
        Verify credentials.
        Raises UnauthorizedError with one message for both unknown user and wrong password.
        """
        user = await self.repository.find_by_username(username)

        if user is None:
            await self.hasher.verify(password, await self._get_dummy_hash())
            raise self._login_failed(username)

        if not await self.hasher.verify(password, user.password_hash):
            raise self._login_failed(username)

        record_login("success")
        logger.info("login_succeeded", user_id=user.id, username=user.username)
        return AuthResult(username=user.username)

    def _registration_conflict(self, username: str) -> ConflictError:
        record_registration("conflict")
        logger.warning("registration_conflict", username=username)
        return ConflictError()

    def _login_failed(self, username: str) -> UnauthorizedError:
        record_login("failure")
        logger.warning("login_failed", username=username)
        return UnauthorizedError()

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self.hasher.hash(_DUMMY_PASSWORD)
        return self._dummy_hash
