# src/quillpost/api/v1/endpoints/auth.py
"""Authentication endpoints for the Quillpost API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from quillpost.api.v1.dependencies import CurrentIdentityDep, UserServiceDep
from quillpost.schemas.auth import AuthRequest, LoginResponse, UserResponse

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: AuthRequest, users: UserServiceDep) -> UserResponse:
    """Create an account. The username must be unused."""
    user = users.register(payload.username, payload.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
def login(payload: AuthRequest, users: UserServiceDep) -> LoginResponse:
    """Exchange a username and password for a signed bearer token."""
    token, user = users.login(payload.username, payload.password)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
def read_current_user(identity: CurrentIdentityDep) -> UserResponse:
    return UserResponse(id=identity.user_id, username=identity.username)


@router.get("/user", response_model=UserResponse)
def find_user(
    users: UserServiceDep,
    username: str = Query(..., min_length=1, max_length=50),
) -> UserResponse:
    """Look up a public account summary by username."""
    return UserResponse.model_validate(users.find_by_username(username))
