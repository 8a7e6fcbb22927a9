"""Signed, time-bound identity tokens."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any, Final

from jose import JWTError, jwt

from quillpost.core.errors import ConfigurationError, InvalidToken
from quillpost.core.settings import MIN_SECRET_KEY_BYTES, settings

logger = logging.getLogger(__name__)

BEARER_PREFIX: Final[str] = "Bearer "
USER_ID_CLAIM: Final[str] = "userId"


def parse_bearer(header_value: str | None) -> str | None:
    """Return the token carried by an ``Authorization`` header value.

    Only the exact, case-sensitive ``"Bearer "`` prefix is accepted. The
    remainder is trimmed; an absent header, a missing prefix or a blank
    remainder all yield ``None``.
    """
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


class TokenService:
    """Issue and validate HMAC-signed JWTs carrying a username and user id.

    Instances hold no mutable state after construction and may be shared by
    any number of request threads.

    Args:
        secret: Symmetric signing key; at least 32 bytes.
        validity_ms: Lifetime of issued tokens in milliseconds.
        algorithm: JWS algorithm used to sign and verify.
        clock: Returns the current time in seconds since the epoch.
    """

    def __init__(
        self,
        secret: str,
        validity_ms: int = 86_400_000,
        *,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if len(secret.encode("utf-8")) < MIN_SECRET_KEY_BYTES:
            raise ConfigurationError(
                f"Token signing key must be at least {MIN_SECRET_KEY_BYTES} bytes long"
            )
        if validity_ms <= 0:
            raise ConfigurationError("Token validity window must be positive")
        self._secret = secret
        self._validity_ms = validity_ms
        self._algorithm = algorithm
        self._clock = clock
        logger.info("Token service initialised with validity of %d ms", validity_ms)

    @property
    def validity_ms(self) -> int:
        return self._validity_ms

    def issue(self, subject: str, user_id: int) -> str:
        """Return a signed token for ``subject``/``user_id``."""
        issued_at_ms = int(self._clock() * 1000)
        expires_at_ms = issued_at_ms + self._validity_ms
        claims: dict[str, Any] = {
            "sub": subject,
            USER_ID_CLAIM: user_id,
            # NumericDate allows fractional seconds; keep millisecond precision.
            "iat": issued_at_ms / 1000,
            "exp": expires_at_ms / 1000,
        }
        token: str = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        logger.debug("Issued token for user_id=%s", user_id)
        return token

    def validate(self, token: str | None) -> bool:
        """Return True only for a well-formed, unexpired token with valid claims.

        Never raises for bad input; the reason is logged at debug level.
        """
        try:
            self._claims(token)
        except InvalidToken as exc:
            logger.debug("Token rejected: %s", exc.message)
            return False
        return True

    def extract_subject(self, token: str) -> str:
        """Return the username embedded in ``token``.

        Raises:
            InvalidToken: If the token does not validate.
        """
        subject: str = self._claims(token)["sub"]
        return subject

    def extract_user_id(self, token: str) -> int:
        """Return the user id embedded in ``token``.

        Raises:
            InvalidToken: If the token does not validate.
        """
        user_id: int = self._claims(token)[USER_ID_CLAIM]
        return user_id

    def expiration(self, token: str) -> datetime | None:
        """Return the expiry of a correctly signed token, expired or not."""
        try:
            payload = self._decode(token)
            return datetime.fromtimestamp(float(payload["exp"]), UTC)
        except (InvalidToken, KeyError, TypeError, ValueError):
            return None

    def _decode(self, token: str | None) -> dict[str, Any]:
        if not token or not token.strip():
            raise InvalidToken("Token is empty")
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # Expiry is checked against the injected clock in _claims().
                options={"verify_exp": False},
            )
        except JWTError as err:
            raise InvalidToken(f"Token failed verification: {err}") from err
        return payload

    def _claims(self, token: str | None) -> dict[str, Any]:
        payload = self._decode(token)

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, int | float):
            raise InvalidToken("Token has no usable expiry")
        if int(self._clock() * 1000) >= round(exp * 1000):
            raise InvalidToken("Token has expired")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidToken("Token subject is missing")

        user_id = payload.get(USER_ID_CLAIM)
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidToken("Token user id is missing or malformed")
        return payload


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Return the process-wide token service built from settings."""
    return TokenService(
        settings.jwt_secret,
        settings.jwt_validity_ms,
        algorithm=settings.jwt_algorithm,
    )
