"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; the API layer maps each kind to a status code in one
place (see ``quillpost.api.v1.errors``). Messages are safe to show to clients.
"""

from __future__ import annotations

from fastapi import status


class BlogError(Exception):
    """Base class for every expected failure surfaced to a caller."""

    code: str = "ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(BlogError):
    """Missing or malformed fields; never worth retrying."""

    code = "BAD_REQUEST"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidCredential(BlogError):
    """Bad login password, bad secret-post password or a missing identity."""

    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class InvalidToken(InvalidCredential):
    """Raised when claims are read from a token that does not validate."""

    default_message = "Invalid token"


class Forbidden(BlogError):
    """Authenticated, but not allowed to act on the resource."""

    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to perform this action"


class NotFound(BlogError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(BlogError):
    """Duplicate unique value or a concurrent write that lost the race."""

    code = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT
    default_message = "The resource was modified concurrently"


class ConfigurationError(RuntimeError):
    """Startup-time misconfiguration. Never mapped to an HTTP response."""


__all__ = [
    "BlogError",
    "InvalidInput",
    "InvalidCredential",
    "InvalidToken",
    "Forbidden",
    "NotFound",
    "Conflict",
    "ConfigurationError",
]
