# tests/services/test_user_service.py
import pytest

from quillpost.core.errors import Conflict, InvalidCredential, InvalidInput, NotFound
from quillpost.core.security import CredentialStore
from quillpost.repositories import UserRepository
from quillpost.services.user_service import UserService


@pytest.fixture()
def users(db_session, credentials, token_service) -> UserService:
    return UserService(UserRepository(db_session), credentials, token_service)


@pytest.mark.parametrize(
    ("username", "password"),
    [("abc", "123456"), ("alice", "secret1"), ("u" * 20, "p" * 60)],
)
def test_registered_credentials_authenticate(users, username, password):
    users.register(username, password)

    assert users.authenticate(username, password)
    assert not users.authenticate(username, password + "x")
    assert not users.authenticate(username, "")


def test_unknown_user_does_not_authenticate(users):
    assert users.authenticate("nobody", "secret1") is False


def test_disabled_user_does_not_authenticate(users, make_user):
    make_user("erin", "secret1", enabled=False)

    assert users.authenticate("erin", "secret1") is False


def test_password_is_stored_hashed(users):
    user = users.register("alice", "secret1")

    assert user.password_hash != "secret1"
    assert user.password_hash.startswith("$2")


def test_duplicate_registration(users):
    users.register("alice", "secret1")

    with pytest.raises(Conflict):
        users.register(" alice ", "secret2")


@pytest.mark.parametrize(("username", "password"), [("", "secret1"), ("al", "secret1"), ("alice", "")])
def test_invalid_registration(users, username, password):
    with pytest.raises(InvalidInput):
        users.register(username, password)


def test_login_token_identifies_user(users, token_service):
    user = users.register("alice", "secret1")

    token, logged_in = users.login("alice", "secret1")

    assert logged_in.id == user.id
    assert token_service.extract_user_id(token) == user.id


def test_login_upgrades_weaker_digest(db_session, token_service, make_user):
    user = make_user("frank", "secret1")
    old_digest = user.password_hash
    stronger = CredentialStore(rounds=5)
    users = UserService(UserRepository(db_session), stronger, token_service)

    users.login("frank", "secret1")

    db_session.refresh(user)
    assert user.password_hash != old_digest
    assert not stronger.needs_rehash(user.password_hash)
    assert stronger.verify("secret1", user.password_hash)


def test_login_keeps_current_digest(users, make_user):
    user = make_user("grace", "secret1")
    digest = user.password_hash

    users.login("grace", "secret1")

    assert user.password_hash == digest


def test_login_failure(users):
    users.register("alice", "secret1")

    with pytest.raises(InvalidCredential):
        users.login("alice", "nope-nope")


def test_lookups(users):
    user = users.register("alice", "secret1")

    assert users.get_user(user.id).username == "alice"
    assert users.find_by_username("alice").id == user.id
    with pytest.raises(NotFound):
        users.get_user(user.id + 100)
    with pytest.raises(NotFound):
        users.find_by_username("ghost")
