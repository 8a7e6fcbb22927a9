"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class PostRequest(BaseModel):
    """Schema for creating or replacing a post."""

    title: str = Field(..., min_length=1, description="Post title, at most 100 characters once trimmed")
    content: str = Field(..., min_length=1, description="Post body, at most 2000 characters once trimmed")
    is_secret: bool = Field(False, description="Require a password for non-authors")
    secret_password: str | None = Field(
        None,
        description="Password for secret posts; omit on update to keep the current one",
    )


class SecretPasswordRequest(BaseModel):
    """Password submitted to unlock a secret post."""

    password: str = Field(..., min_length=1, description="Secret password; surrounding spaces are ignored")


class PostResponse(BaseModel):
    """Schema for post information returned by the API.

    ``title`` and ``content`` are already masked when ``has_access`` is False.
    """

    id: int
    title: str
    content: str
    author_id: int
    author_username: str | None = None
    is_secret: bool
    has_access: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
