"""Who sees what of a post.

The policy is a pure function of the post, the viewer and whether the viewer
unlocked the post in the current request. It never writes to the entity;
callers receive a separate ``Visibility`` value and shape the response from
it, so concurrent readers of the same ``Post`` cannot affect one another.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Final

from quillpost.models.post import Post

SECRET_CONTENT_PLACEHOLDER: Final[str] = "This post is secret. Enter the password to read it."
SECRET_TITLE_MARKER: Final[str] = "🔐 Secret post"


class VisibilityState(str, enum.Enum):
    PUBLIC = "PUBLIC"
    SECRET_AS_AUTHOR = "SECRET_AS_AUTHOR"
    SECRET_UNLOCKED = "SECRET_UNLOCKED"
    SECRET_LOCKED = "SECRET_LOCKED"


class PostView(str, enum.Enum):
    """Where a post is being rendered; only affects locked-title masking."""

    LIST = "list"
    DETAIL = "detail"
    SEARCH = "search"


@dataclass(frozen=True)
class AccessDecision:
    viewer_id: int | None
    is_author: bool
    has_access: bool


@dataclass(frozen=True)
class Visibility:
    state: VisibilityState
    decision: AccessDecision


@dataclass(frozen=True)
class PostPresentation:
    """The title/content pair a viewer is allowed to receive."""

    title: str
    content: str
    has_access: bool


def evaluate(post: Post, viewer_id: int | None, *, unlocked: bool = False) -> Visibility:
    """Classify ``post`` for ``viewer_id``.

    Args:
        post: The post being read.
        viewer_id: Resolved caller id, or None for anonymous readers.
        unlocked: True only when the caller supplied the correct secret
            password in this request.
    """
    is_author = viewer_id is not None and post.author_id == viewer_id
    if not post.is_secret:
        state = VisibilityState.PUBLIC
    elif is_author:
        state = VisibilityState.SECRET_AS_AUTHOR
    elif unlocked:
        state = VisibilityState.SECRET_UNLOCKED
    else:
        state = VisibilityState.SECRET_LOCKED

    decision = AccessDecision(
        viewer_id=viewer_id,
        is_author=is_author,
        has_access=state is not VisibilityState.SECRET_LOCKED,
    )
    return Visibility(state=state, decision=decision)


def present(post: Post, visibility: Visibility, view: PostView) -> PostPresentation:
    """Return the title and content ``visibility`` permits for ``view``.

    Locked posts always get the content placeholder. Their title stays
    readable on detail and search pages and is replaced with a marker in
    listings.
    """
    if visibility.decision.has_access:
        return PostPresentation(title=post.title, content=post.content, has_access=True)

    title = SECRET_TITLE_MARKER if view is PostView.LIST else post.title
    return PostPresentation(
        title=title,
        content=SECRET_CONTENT_PLACEHOLDER,
        has_access=False,
    )
