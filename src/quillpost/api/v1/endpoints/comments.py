# src/quillpost/api/v1/endpoints/comments.py
"""Comment endpoints nested under a post."""

from __future__ import annotations

from fastapi import APIRouter, status

from quillpost.api.v1.dependencies import CommentServiceDep, CurrentIdentityDep
from quillpost.schemas.comment import CommentRequest, CommentResponse

router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
def list_comments(post_id: int, comments: CommentServiceDep) -> list[CommentResponse]:
    """List a post's comments, oldest first."""
    return comments.list_comments(post_id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: int,
    payload: CommentRequest,
    comments: CommentServiceDep,
    identity: CurrentIdentityDep,
) -> CommentResponse:
    return comments.add_comment(post_id, identity, payload.content)


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    post_id: int,
    comment_id: int,
    payload: CommentRequest,
    comments: CommentServiceDep,
    identity: CurrentIdentityDep,
) -> CommentResponse:
    return comments.update_comment(post_id, comment_id, identity, payload.content)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    post_id: int,
    comment_id: int,
    comments: CommentServiceDep,
    identity: CurrentIdentityDep,
) -> None:
    comments.delete_comment(post_id, comment_id, identity)
