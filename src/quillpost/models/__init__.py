# src/quillpost/models/__init__.py
"""SQLAlchemy models for the Quillpost application."""

from .comment import Comment
from .post import Post
from .user import User, UserRole

__all__ = [
    "Comment",
    "Post",
    "User", "UserRole",
]
