"""Post reads, writes and the secret-password gate."""
from __future__ import annotations

import logging

from quillpost.core.errors import InvalidCredential, InvalidInput, NotFound
from quillpost.core.security import CredentialStore
from quillpost.models.post import Post
from quillpost.repositories.post_repo import PostRepository
from quillpost.schemas.post import PostRequest, PostResponse
from quillpost.services.access import Identity
from quillpost.services.authorization import assert_owner
from quillpost.services.visibility import PostView, Visibility, evaluate, present

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 2000
SECRET_PASSWORD_MAX_LENGTH = 50
SEARCH_MIN_LENGTH = 2

__all__ = ["PostService", "to_post_response"]


def _viewer_id(identity: Identity | None) -> int | None:
    return identity.user_id if identity is not None else None


def to_post_response(post: Post, visibility: Visibility, view: PostView) -> PostResponse:
    """Build the API payload for ``post`` as ``visibility`` allows."""
    shown = present(post, visibility, view)
    return PostResponse(
        id=post.id,
        title=shown.title,
        content=shown.content,
        author_id=post.author_id,
        author_username=post.author.username if post.author is not None else None,
        is_secret=post.is_secret,
        has_access=shown.has_access,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _clean_text(title: str, content: str) -> tuple[str, str]:
    title = (title or "").strip()
    content = (content or "").strip()
    if not title:
        raise InvalidInput("Title is required")
    if not content:
        raise InvalidInput("Content is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise InvalidInput(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    if len(content) > CONTENT_MAX_LENGTH:
        raise InvalidInput(f"Content cannot exceed {CONTENT_MAX_LENGTH} characters")
    return title, content


def _clean_secret_password(secret_password: str | None) -> str | None:
    """Return the trimmed password, or None when none was supplied."""
    if secret_password is None:
        return None
    trimmed = secret_password.strip()
    if not trimmed:
        return None
    if len(trimmed) > SECRET_PASSWORD_MAX_LENGTH:
        raise InvalidInput(
            f"Secret password cannot exceed {SECRET_PASSWORD_MAX_LENGTH} characters"
        )
    return trimmed


class PostService:
    """Post operations. Every call takes the caller's identity explicitly."""

    def __init__(self, posts: PostRepository, credentials: CredentialStore) -> None:
        self.posts = posts
        self.credentials = credentials

    def _require_post(self, post_id: int) -> Post:
        post = self.posts.find_post_by_id(post_id)
        if post is None:
            logger.info("Post %s not found", post_id)
            raise NotFound("Post not found")
        return post

    def list_posts(self, identity: Identity | None) -> list[PostResponse]:
        """Return every post, newest first, with locked secrets masked."""
        viewer_id = _viewer_id(identity)
        posts = self.posts.list_posts()
        logger.debug("Listing %d posts", len(posts))
        return [
            to_post_response(post, evaluate(post, viewer_id), PostView.LIST)
            for post in posts
        ]

    def search(self, query: str, identity: Identity | None) -> list[PostResponse]:
        """Return posts matching every whitespace-separated keyword in ``query``.

        Raises:
            InvalidInput: If the trimmed query is shorter than two characters.
        """
        query = (query or "").strip()
        if len(query) < SEARCH_MIN_LENGTH:
            raise InvalidInput(f"Search query must be at least {SEARCH_MIN_LENGTH} characters")
        viewer_id = _viewer_id(identity)
        results = self.posts.search_posts(query.split())
        logger.debug("Search %r matched %d posts", query, len(results))
        return [
            to_post_response(post, evaluate(post, viewer_id), PostView.SEARCH)
            for post in results
        ]

    def get_post(self, post_id: int, identity: Identity | None) -> PostResponse:
        post = self._require_post(post_id)
        return to_post_response(post, evaluate(post, _viewer_id(identity)), PostView.DETAIL)

    def verify_secret_password(
        self,
        post_id: int,
        password: str,
        identity: Identity | None = None,
    ) -> PostResponse:
        """Return the full post if ``password`` unlocks it.

        The unlock applies to this response only and is not remembered.

        Raises:
            InvalidInput: If ``password`` is blank.
            NotFound: If the post does not exist.
            InvalidCredential: If the password does not match.
        """
        if not password or not password.strip():
            raise InvalidInput("Password is required")
        post = self._require_post(post_id)
        viewer_id = _viewer_id(identity)

        if not post.is_secret:
            logger.info("Password check on public post %s; nothing to unlock", post_id)
            return to_post_response(post, evaluate(post, viewer_id), PostView.DETAIL)

        if not self.credentials.verify(password.strip(), post.secret_password_hash):
            logger.warning("Secret password mismatch for post %s", post_id)
            raise InvalidCredential("Password does not match")

        logger.info("Secret post %s unlocked", post_id)
        visibility = evaluate(post, viewer_id, unlocked=True)
        return to_post_response(post, visibility, PostView.DETAIL)

    def create_post(self, identity: Identity, payload: PostRequest) -> PostResponse:
        """Create a post owned by ``identity``.

        Raises:
            InvalidInput: On bad fields, or a secret post without a password.
        """
        title, content = _clean_text(payload.title, payload.content)
        secret_password = _clean_secret_password(payload.secret_password)
        if payload.is_secret and secret_password is None:
            raise InvalidInput("A secret post needs a password")

        post = Post(
            title=title,
            content=content,
            author_id=identity.user_id,
            is_secret=payload.is_secret,
            secret_password_hash=(
                self.credentials.hash(secret_password) if payload.is_secret else None
            ),
        )
        post = self.posts.save_post(post)
        logger.info(
            "Created post %s by user_id=%s (secret=%s)",
            post.id,
            identity.user_id,
            post.is_secret,
        )
        return to_post_response(post, evaluate(post, identity.user_id), PostView.DETAIL)

    def update_post(self, post_id: int, identity: Identity, payload: PostRequest) -> PostResponse:
        """Replace the post's fields. Only its author may do this.

        Leaving ``secret_password`` empty on a post that is already secret keeps
        the current password. Making a post public drops its password.

        Raises:
            NotFound: If the post does not exist.
            Forbidden: If ``identity`` is not the author.
            InvalidInput: On bad fields, or switching to secret without a password.
        """
        post = self._require_post(post_id)
        assert_owner(post, identity.user_id, "update")

        title, content = _clean_text(payload.title, payload.content)
        secret_password = _clean_secret_password(payload.secret_password)

        if payload.is_secret:
            if secret_password is not None:
                post.secret_password_hash = self.credentials.hash(secret_password)
            elif post.secret_password_hash is None:
                raise InvalidInput("A secret post needs a password")
        else:
            post.secret_password_hash = None

        post.title = title
        post.content = content
        post.is_secret = payload.is_secret
        post = self.posts.save_post(post)
        logger.info("Updated post %s by user_id=%s", post_id, identity.user_id)
        return to_post_response(post, evaluate(post, identity.user_id), PostView.DETAIL)

    def delete_post(self, post_id: int, identity: Identity) -> None:
        """Delete the post and its comments. Only its author may do this."""
        post = self._require_post(post_id)
        assert_owner(post, identity.user_id, "delete")
        self.posts.delete_post(post)
        logger.info("Deleted post %s by user_id=%s", post_id, identity.user_id)
