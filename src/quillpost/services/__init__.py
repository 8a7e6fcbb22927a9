# src/quillpost/services/__init__.py
"""Business logic services for the Quillpost application."""

from .access import AccessFilter, Identity, is_public_path
from .authorization import assert_owner
from .comment_service import CommentService
from .post_service import PostService
from .tokens import TokenService, parse_bearer
from .user_service import UserService

__all__ = [
    "AccessFilter",
    "Identity",
    "is_public_path",
    "assert_owner",
    "CommentService",
    "PostService",
    "TokenService",
    "parse_bearer",
    "UserService",
]
