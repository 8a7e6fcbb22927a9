"""Transaction handling shared by the repositories."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from quillpost.core.errors import Conflict

logger = logging.getLogger(__name__)


class Repository:
    """Base class binding a repository to one session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def atomic(self, conflict_message: str | None = None) -> Iterator[None]:
        """Commit the enclosed writes as one unit or roll all of them back.

        Version clashes and unique-constraint violations surface as
        ``Conflict``; anything else propagates unchanged after the rollback.
        """
        try:
            yield
            self.session.commit()
        except StaleDataError as exc:
            self.session.rollback()
            logger.warning("Concurrent update rejected: %s", exc)
            raise Conflict(conflict_message) from exc
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Integrity violation: %s", exc.orig)
            raise Conflict(conflict_message or "Resource already exists") from exc
        except Exception:
            self.session.rollback()
            raise
