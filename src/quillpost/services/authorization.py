"""Ownership guard for mutating posts and comments."""

from __future__ import annotations

import logging
from typing import Protocol

from quillpost.core.errors import Forbidden

logger = logging.getLogger(__name__)


class Owned(Protocol):
    id: int
    author_id: int


def assert_owner(resource: Owned, viewer_id: int, action_name: str) -> None:
    """Raise ``Forbidden`` unless ``viewer_id`` authored ``resource``.

    Used for update and delete only. Creation needs just an identity and
    reads go through the visibility policy.
    """
    if resource.author_id != viewer_id:
        logger.warning(
            "Rejected %s on %s id=%s by user_id=%s (author_id=%s)",
            action_name,
            type(resource).__name__,
            resource.id,
            viewer_id,
            resource.author_id,
        )
        raise Forbidden(f"You can only {action_name} your own content")
