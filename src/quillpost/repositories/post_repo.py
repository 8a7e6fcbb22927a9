"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import joinedload

from quillpost.models.post import Post
from quillpost.models.user import User

from .base import Repository

__all__ = ["PostRepository"]


class PostRepository(Repository):
    """Thin wrapper around database access for post entities."""

    def find_post_by_id(self, post_id: int) -> Post | None:
        """Return a post with its author loaded, or None."""
        stmt = select(Post).options(joinedload(Post.author)).where(Post.id == post_id)
        return self.session.execute(stmt).scalars().first()

    def list_posts(self) -> list[Post]:
        """Return every post, newest first."""
        stmt = select(Post).options(joinedload(Post.author)).order_by(Post.id.desc())
        return list(self.session.execute(stmt).scalars())

    def search_posts(self, keywords: list[str]) -> list[Post]:
        """Return posts matching every keyword, newest first.

        A keyword matches the title, the author's username or, for public
        posts only, the content.
        """
        stmt = select(Post).join(Post.author).options(joinedload(Post.author))
        for keyword in keywords:
            stmt = stmt.where(
                or_(
                    Post.title.icontains(keyword, autoescape=True),
                    User.username.icontains(keyword, autoescape=True),
                    Post.is_secret.is_(False) & Post.content.icontains(keyword, autoescape=True),
                )
            )
        stmt = stmt.order_by(Post.id.desc())
        return list(self.session.execute(stmt).scalars().unique())

    def save_post(self, post: Post) -> Post:
        """Insert or update ``post`` in a single transaction."""
        with self.atomic("Post was modified by another request"):
            self.session.add(post)
        self.session.refresh(post)
        return post

    def delete_post(self, post: Post) -> None:
        """Delete ``post`` together with its comments."""
        with self.atomic("Post was modified by another request"):
            self.session.delete(post)
