# tests/services/test_access_filter.py
import pytest

from quillpost.models import UserRole
from quillpost.repositories import UserRepository
from quillpost.services.access import AccessFilter, Identity, is_public_path


@pytest.fixture()
def access_filter(token_service, db_session) -> AccessFilter:
    return AccessFilter(token_service, UserRepository(db_session))


class TestResolve:
    def test_valid_token_resolves_identity(self, access_filter, token_service, alice):
        header = f"Bearer {token_service.issue(alice.username, alice.id)}"

        identity = access_filter.resolve(header)

        assert identity == Identity(user_id=alice.id, username="alice", role=UserRole.USER)

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer    ", "Basic abc", "Bearer x.y.z"])
    def test_unusable_header_is_anonymous(self, access_filter, header):
        assert access_filter.resolve(header) is None

    def test_disabled_user_is_anonymous(self, access_filter, token_service, make_user):
        user = make_user("mallory", enabled=False)

        assert access_filter.resolve(f"Bearer {token_service.issue(user.username, user.id)}") is None


class TestPublicPaths:
    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/"),
            ("GET", "/health"),
            ("POST", "/auth/register"),
            ("POST", "/auth/login"),
            ("GET", "/auth/user"),
            ("GET", "/posts"),
            ("GET", "/posts/search"),
            ("GET", "/posts/12"),
            ("HEAD", "/posts/12"),
            ("GET", "/posts/12/comments"),
            ("POST", "/posts/12/verify-password"),
        ],
    )
    def test_public(self, method, path):
        assert is_public_path(method, path)

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("POST", "/posts"),
            ("PUT", "/posts/12"),
            ("DELETE", "/posts/12"),
            ("POST", "/posts/12/comments"),
            ("DELETE", "/posts/12/comments/3"),
            ("GET", "/auth/me"),
            ("GET", "/posts/abc"),
        ],
    )
    def test_protected(self, method, path):
        assert not is_public_path(method, path)
