"""Comment operations scoped to a parent post."""
from __future__ import annotations

import logging

from quillpost.core.errors import InvalidInput, NotFound
from quillpost.models.comment import Comment
from quillpost.repositories.comment_repo import CommentRepository
from quillpost.repositories.post_repo import PostRepository
from quillpost.schemas.comment import CommentResponse
from quillpost.services.access import Identity
from quillpost.services.authorization import assert_owner

logger = logging.getLogger(__name__)

COMMENT_MAX_LENGTH = 1000

__all__ = ["CommentService", "to_comment_response"]


def to_comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        post_id=comment.post_id,
        author_id=comment.author_id,
        author_username=comment.author.username if comment.author is not None else None,
        created_at=comment.created_at,
    )


def _clean_content(content: str) -> str:
    content = (content or "").strip()
    if not content:
        raise InvalidInput("Comment content is required")
    if len(content) > COMMENT_MAX_LENGTH:
        raise InvalidInput(f"Comment cannot exceed {COMMENT_MAX_LENGTH} characters")
    return content


class CommentService:
    def __init__(self, comments: CommentRepository, posts: PostRepository) -> None:
        self.comments = comments
        self.posts = posts

    def _require_post(self, post_id: int) -> None:
        if self.posts.find_post_by_id(post_id) is None:
            raise NotFound("Post not found")

    def _require_comment(self, post_id: int, comment_id: int) -> Comment:
        comment = self.comments.find_comment_by_id(comment_id)
        # A comment addressed through another post's URL does not exist there.
        if comment is None or comment.post_id != post_id:
            raise NotFound("Comment not found")
        return comment

    def list_comments(self, post_id: int) -> list[CommentResponse]:
        self._require_post(post_id)
        return [to_comment_response(c) for c in self.comments.list_comments_for_post(post_id)]

    def add_comment(self, post_id: int, identity: Identity, content: str) -> CommentResponse:
        content = _clean_content(content)
        self._require_post(post_id)
        comment = Comment(content=content, post_id=post_id, author_id=identity.user_id)
        comment = self.comments.save_comment(comment)
        logger.info(
            "Created comment %s on post %s by user_id=%s",
            comment.id,
            post_id,
            identity.user_id,
        )
        return to_comment_response(comment)

    def update_comment(
        self,
        post_id: int,
        comment_id: int,
        identity: Identity,
        content: str,
    ) -> CommentResponse:
        comment = self._require_comment(post_id, comment_id)
        assert_owner(comment, identity.user_id, "update")
        comment.content = _clean_content(content)
        comment = self.comments.save_comment(comment)
        logger.info("Updated comment %s by user_id=%s", comment_id, identity.user_id)
        return to_comment_response(comment)

    def delete_comment(self, post_id: int, comment_id: int, identity: Identity) -> None:
        comment = self._require_comment(post_id, comment_id)
        assert_owner(comment, identity.user_id, "delete")
        self.comments.delete_comment(comment)
        logger.info("Deleted comment %s by user_id=%s", comment_id, identity.user_id)
