# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-signing-key-that-is-long-enough-for-hs256")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from quillpost.api.v1.dependencies import get_credential_store_dep
from quillpost.core.security import CredentialStore
from quillpost.db.session import Base
from quillpost.db.session import get_db as app_get_session
from quillpost.main import app as fastapi_app
from quillpost.models import Post, User, UserRole
from quillpost.services.access import Identity
from quillpost.services.tokens import TokenService, get_token_service

TEST_DB_URL = "sqlite://"
DEFAULT_PASSWORD = "password123"
# bcrypt's floor; settings refuse it, so the suite injects the store directly.
TEST_HASH_ROUNDS = 4


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(scope="session")
def credentials() -> CredentialStore:
    return CredentialStore(rounds=TEST_HASH_ROUNDS)


@pytest.fixture(autouse=True)
def override_credential_store(app: FastAPI, credentials: CredentialStore) -> Iterator[None]:
    app.dependency_overrides[get_credential_store_dep] = lambda: credentials
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_credential_store_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def token_service() -> TokenService:
    return get_token_service()


@pytest.fixture()
def make_user(db_session: Session, credentials: CredentialStore) -> Callable[..., User]:
    """Insert an account directly, bypassing the HTTP layer."""

    def _make_user(
        username: str,
        password: str = DEFAULT_PASSWORD,
        *,
        enabled: bool = True,
    ) -> User:
        user = User(
            username=username,
            password_hash=credentials.hash(password),
            role=UserRole.USER,
            enabled=enabled,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session, credentials: CredentialStore) -> Callable[..., Post]:
    def _make_post(
        author: User,
        title: str = "Hello",
        content: str = "First post body",
        *,
        secret_password: str | None = None,
    ) -> Post:
        post = Post(
            title=title,
            content=content,
            author_id=author.id,
            is_secret=secret_password is not None,
            secret_password_hash=(
                credentials.hash(secret_password) if secret_password is not None else None
            ),
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture()
def auth_headers(token_service: TokenService) -> Callable[[User], dict[str, str]]:
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_service.issue(user.username, user.id)}"}

    return _auth_headers


@pytest.fixture()
def alice_headers(auth_headers: Callable[[User], dict[str, str]], alice: User) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_headers(auth_headers: Callable[[User], dict[str, str]], bob: User) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def identity_of() -> Callable[[User], Identity]:
    def _identity_of(user: User) -> Identity:
        return Identity(user_id=user.id, username=user.username, role=user.role)

    return _identity_of
