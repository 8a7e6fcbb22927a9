"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import AuthRequest, LoginResponse, UserResponse
from .comment import CommentRequest, CommentResponse
from .common import ErrorResponse
from .post import PostRequest, PostResponse, SecretPasswordRequest

__all__ = [
    "AuthRequest", "LoginResponse", "UserResponse",
    "CommentRequest", "CommentResponse",
    "ErrorResponse",
    "PostRequest", "PostResponse", "SecretPasswordRequest",
]
