"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from quillpost.models.comment import Comment

from .base import Repository

__all__ = ["CommentRepository"]


class CommentRepository(Repository):
    """Lookups and writes for ``Comment`` rows."""

    def find_comment_by_id(self, comment_id: int) -> Comment | None:
        stmt = (
            select(Comment)
            .options(joinedload(Comment.author))
            .where(Comment.id == comment_id)
        )
        return self.session.execute(stmt).scalars().first()

    def list_comments_for_post(self, post_id: int) -> list[Comment]:
        """Return the comments of a post in creation order."""
        stmt = (
            select(Comment)
            .options(joinedload(Comment.author))
            .where(Comment.post_id == post_id)
            .order_by(Comment.id.asc())
        )
        return list(self.session.execute(stmt).scalars())

    def save_comment(self, comment: Comment) -> Comment:
        with self.atomic("Comment was modified by another request"):
            self.session.add(comment)
        self.session.refresh(comment)
        return comment

    def delete_comment(self, comment: Comment) -> None:
        with self.atomic("Comment was modified by another request"):
            self.session.delete(comment)
