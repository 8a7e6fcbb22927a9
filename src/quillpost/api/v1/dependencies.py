"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from quillpost.core.errors import InvalidCredential
from quillpost.core.security import CredentialStore, get_credential_store
from quillpost.db.session import get_db
from quillpost.repositories import CommentRepository, PostRepository, UserRepository
from quillpost.services.access import AccessFilter, Identity, is_public_path
from quillpost.services.comment_service import CommentService
from quillpost.services.post_service import PostService
from quillpost.services.tokens import TokenService, get_token_service
from quillpost.services.user_service import UserService

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_token_service_dep() -> TokenService:
    return get_token_service()


def get_credential_store_dep() -> CredentialStore:
    return get_credential_store()


TokenServiceDep = Annotated[TokenService, Depends(get_token_service_dep)]
CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store_dep)]


def resolve_identity(
    db: SessionDep,
    tokens: TokenServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> Identity | None:
    """Resolve the caller from the ``Authorization`` header.

    Never raises for a bad or missing token; the request simply proceeds
    without an identity.
    """
    return AccessFilter(tokens, UserRepository(db)).resolve(authorization)


OptionalIdentityDep = Annotated[Identity | None, Depends(resolve_identity)]


def enforce_access_policy(request: Request, identity: OptionalIdentityDep) -> None:
    """Reject anonymous callers on routes outside the public-path policy.

    Raises:
        InvalidCredential: If the route needs an identity and none was resolved.
    """
    if identity is None and not is_public_path(request.method, request.url.path):
        raise InvalidCredential("Authentication required")


def require_identity(identity: OptionalIdentityDep) -> Identity:
    """Return the resolved identity or fail with ``InvalidCredential``."""
    if identity is None:
        raise InvalidCredential("Authentication required")
    return identity


CurrentIdentityDep = Annotated[Identity, Depends(require_identity)]


def get_user_service(
    db: SessionDep,
    credentials: CredentialStoreDep,
    tokens: TokenServiceDep,
) -> UserService:
    return UserService(UserRepository(db), credentials, tokens)


def get_post_service(db: SessionDep, credentials: CredentialStoreDep) -> PostService:
    return PostService(PostRepository(db), credentials)


def get_comment_service(db: SessionDep) -> CommentService:
    return CommentService(CommentRepository(db), PostRepository(db))


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
