"""Password hashing built on passlib's bcrypt handler."""
from __future__ import annotations

import logging
from functools import lru_cache

from passlib.context import CryptContext

from quillpost.core.settings import settings

logger = logging.getLogger(__name__)


class CredentialStore:
    """Hash and verify secrets with a salted, deliberately slow algorithm.

    The same primitive protects login passwords and per-post secret
    passwords. Callers keep the two namespaces apart; a digest produced for
    one is never checked against the other.
    """

    def __init__(self, rounds: int | None = None) -> None:
        self._rounds = rounds if rounds is not None else settings.password_hash_rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self._rounds,
            bcrypt__min_rounds=self._rounds,
        )

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """Return a salted digest for ``plaintext``.

        Raises:
            ValueError: If ``plaintext`` is empty.
        """
        if not plaintext:
            raise ValueError("Cannot hash an empty secret")
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str | None) -> bool:
        """Return True if ``plaintext`` matches ``digest``.

        Empty input and unparseable digests are a mismatch, not an error.
        """
        if not plaintext or not digest:
            return False
        try:
            return bool(self._context.verify(plaintext, digest))
        except (ValueError, TypeError) as exc:
            logger.warning("Rejected malformed password digest: %s", exc)
            return False

    def needs_rehash(self, digest: str) -> bool:
        """Return True when ``digest`` was produced with weaker parameters."""
        return bool(self._context.needs_update(digest))


@lru_cache(maxsize=1)
def get_credential_store() -> CredentialStore:
    """Return the process-wide credential store."""
    return CredentialStore()
