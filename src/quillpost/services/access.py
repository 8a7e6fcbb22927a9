"""Resolve the caller behind a request.

``AccessFilter`` turns an ``Authorization`` header into an optional
``Identity``. It never rejects a request: a missing, malformed or expired
token simply means "anonymous". Whether a route needs an identity is decided
by ``is_public_path`` and enforced by the route layer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Final

from quillpost.models.user import UserRole
from quillpost.repositories.user_repo import UserRepository
from quillpost.services.tokens import TokenService, parse_bearer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, passed explicitly into service calls."""

    user_id: int
    username: str
    role: UserRole


# (method, path pattern) pairs reachable without an identity.
_PUBLIC_ROUTES: Final[tuple[tuple[str, re.Pattern[str]], ...]] = (
    ("GET", re.compile(r"/")),
    ("GET", re.compile(r"/health")),
    ("POST", re.compile(r"/auth/register")),
    ("POST", re.compile(r"/auth/login")),
    ("GET", re.compile(r"/auth/user")),
    ("GET", re.compile(r"/posts/?")),
    ("GET", re.compile(r"/posts/search")),
    ("GET", re.compile(r"/posts/\d+")),
    ("GET", re.compile(r"/posts/\d+/comments/?")),
    ("POST", re.compile(r"/posts/\d+/verify-password")),
)


def is_public_path(method: str, path: str) -> bool:
    """Return True if ``method``/``path`` may be served to anonymous callers."""
    method = method.upper()
    if method == "HEAD":
        method = "GET"
    return any(
        method == allowed and pattern.fullmatch(path)
        for allowed, pattern in _PUBLIC_ROUTES
    )


class AccessFilter:
    """Resolve an optional identity from a bearer token."""

    def __init__(self, token_service: TokenService, users: UserRepository) -> None:
        self._tokens = token_service
        self._users = users

    def resolve(self, authorization: str | None) -> Identity | None:
        """Return the caller's identity, or None when there is none to trust.

        Args:
            authorization: Raw ``Authorization`` header value, if any.
        """
        token = parse_bearer(authorization)
        if token is None:
            return None
        if not self._tokens.validate(token):
            return None

        subject = self._tokens.extract_subject(token)
        user_id = self._tokens.extract_user_id(token)
        user = self._users.find_user_by_id(user_id)
        if user is None:
            logger.info("Token for unknown user_id=%s ignored", user_id)
            return None
        if not user.enabled:
            logger.info("Token for disabled user_id=%s ignored", user_id)
            return None
        if user.username != subject:
            logger.warning("Token subject does not match user_id=%s", user_id)
            return None
        return Identity(user_id=user.id, username=user.username, role=user.role)
