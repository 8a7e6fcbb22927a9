"""Comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentRequest(BaseModel):
    content: str = Field(..., min_length=1, description="Comment body, at most 1000 characters once trimmed")


class CommentResponse(BaseModel):
    id: int
    content: str
    post_id: int
    author_id: int
    author_username: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
