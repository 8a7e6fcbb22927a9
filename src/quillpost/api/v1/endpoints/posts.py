# src/quillpost/api/v1/endpoints/posts.py
"""Post endpoints for the Quillpost API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from quillpost.api.v1.dependencies import (
    CurrentIdentityDep,
    OptionalIdentityDep,
    PostServiceDep,
)
from quillpost.schemas.post import PostRequest, PostResponse, SecretPasswordRequest

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
def list_posts(
    posts: PostServiceDep,
    identity: OptionalIdentityDep,
    search: str | None = Query(None, description="Optional keyword filter"),
) -> list[PostResponse]:
    """List posts newest first.

    Secret posts the caller cannot read are listed with a masked title and
    placeholder content. A non-blank ``search`` behaves like ``/posts/search``;
    a blank one lists everything.
    """
    if search and search.strip():
        return posts.search(search, identity)
    return posts.list_posts(identity)


@router.get("/search", response_model=list[PostResponse])
def search_posts(
    posts: PostServiceDep,
    identity: OptionalIdentityDep,
    q: str = Query(..., description="Whitespace-separated keywords, all must match"),
) -> list[PostResponse]:
    return posts.search(q, identity)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    posts: PostServiceDep,
    identity: OptionalIdentityDep,
) -> PostResponse:
    return posts.get_post(post_id, identity)


@router.post("/{post_id}/verify-password", response_model=PostResponse)
def verify_secret_password(
    post_id: int,
    payload: SecretPasswordRequest,
    posts: PostServiceDep,
    identity: OptionalIdentityDep,
) -> PostResponse:
    """Return the full post when ``password`` unlocks it.

    The unlock is not remembered; later reads stay masked.
    """
    return posts.verify_secret_password(post_id, payload.password, identity)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostRequest,
    posts: PostServiceDep,
    identity: CurrentIdentityDep,
) -> PostResponse:
    return posts.create_post(identity, payload)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    payload: PostRequest,
    posts: PostServiceDep,
    identity: CurrentIdentityDep,
) -> PostResponse:
    """Replace a post's title, body and secrecy. Author only."""
    return posts.update_post(post_id, identity, payload)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    posts: PostServiceDep,
    identity: CurrentIdentityDep,
) -> None:
    posts.delete_post(post_id, identity)
