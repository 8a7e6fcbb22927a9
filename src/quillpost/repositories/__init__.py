"""Data access helpers over the SQLAlchemy session."""

from .comment_repo import CommentRepository
from .post_repo import PostRepository
from .user_repo import UserRepository

__all__ = ["CommentRepository", "PostRepository", "UserRepository"]
