"""Registration, login and account lookups."""
from __future__ import annotations

import logging

from quillpost.core.errors import Conflict, InvalidCredential, InvalidInput, NotFound
from quillpost.core.security import CredentialStore
from quillpost.models.user import User, UserRole
from quillpost.repositories.user_repo import UserRepository
from quillpost.services.tokens import TokenService

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100

__all__ = ["UserService"]


class UserService:
    """Account operations over a ``UserRepository``."""

    def __init__(
        self,
        users: UserRepository,
        credentials: CredentialStore,
        tokens: TokenService,
    ) -> None:
        self.users = users
        self.credentials = credentials
        self.tokens = tokens

    def register(self, username: str, password: str) -> User:
        """Create an account with a hashed password.

        Raises:
            InvalidInput: If the username or password fails validation.
            Conflict: If the username is already taken.
        """
        if not username or not username.strip():
            raise InvalidInput("Username is required")
        if not password:
            raise InvalidInput("Password is required")

        username = username.strip()
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            logger.warning("Registration rejected: username length %d", len(username))
            raise InvalidInput(
                f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
            )
        if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
            logger.warning("Registration rejected: password length out of range")
            raise InvalidInput(
                f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters"
            )
        if self.users.find_user_by_username(username) is not None:
            logger.warning("Registration rejected: username %r already taken", username)
            raise Conflict("Username is already taken")

        user = User(
            username=username,
            password_hash=self.credentials.hash(password),
            role=UserRole.USER,
            enabled=True,
        )
        user = self.users.save_user(user)
        logger.info("Registered user_id=%s username=%s", user.id, user.username)
        return user

    def authenticate(self, username: str, password: str) -> bool:
        """Return True if ``password`` is correct for an enabled ``username``."""
        if not username or not username.strip() or not password:
            return False
        user = self.users.find_user_by_username(username.strip())
        if user is None or not user.enabled:
            logger.debug("Authentication failed for unknown or disabled user")
            return False
        return self.credentials.verify(password, user.password_hash)

    def login(self, username: str, password: str) -> tuple[str, User]:
        """Return a fresh token and the account for valid credentials.

        Raises:
            InvalidCredential: For any mismatch; the message does not say which
                part was wrong.
        """
        if not self.authenticate(username, password):
            logger.warning("Login failed for username=%s", (username or "").strip())
            raise InvalidCredential("Invalid username or password")
        user = self.users.find_user_by_username(username.strip())
        if user is None:  # pragma: no cover - removed between the two lookups
            raise InvalidCredential("Invalid username or password")
        if self.credentials.needs_rehash(user.password_hash):
            # Digest predates the current cost; upgrade it while the plaintext is at hand.
            user.password_hash = self.credentials.hash(password)
            user = self.users.save_user(user)
            logger.info("Upgraded password digest for user_id=%s", user.id)
        token = self.tokens.issue(user.username, user.id)
        logger.info("Login succeeded for user_id=%s", user.id)
        return token, user

    def get_user(self, user_id: int) -> User:
        user = self.users.find_user_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def find_by_username(self, username: str) -> User:
        """Return the account named ``username``.

        Raises:
            NotFound: If there is no such account.
        """
        if not username or not username.strip():
            raise InvalidInput("Username is required")
        user = self.users.find_user_by_username(username.strip())
        if user is None:
            raise NotFound("User not found")
        return user
