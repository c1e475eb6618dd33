"""
Tests for password hashing and session handling
"""
from datetime import timedelta

import pytest

from portfolio.models.user import Session as UserSession
from portfolio.services.auth_service import (AuthService, hash_password,
                                             verify_password)
from portfolio.utils.datetime_utils import utc_now


def test_hash_is_salted():
    first = hash_password("secret")
    second = hash_password("secret")
    assert first != second
    assert verify_password("secret", first)
    assert verify_password("secret", second)


def test_verify_rejects_wrong_password():
    assert not verify_password("wrong", hash_password("secret"))


def test_verify_handles_malformed_hash():
    assert verify_password("secret", "not-a-bcrypt-hash") is False


def test_long_passwords_are_accepted():
    password = "x" * 200
    assert verify_password(password, hash_password(password))


def test_register_and_authenticate(db):
    service = AuthService(db)
    user = service.register_user("alice", "pw-alice")

    assert user.password_hash != "pw-alice"
    assert service.authenticate("alice", "pw-alice").id == user.id
    assert service.authenticate("alice", "nope") is None
    assert service.authenticate("bob", "pw-alice") is None


def test_authenticate_sets_last_login(db):
    service = AuthService(db)
    user = service.register_user("alice", "pw")
    assert user.last_login is None
    service.authenticate("alice", "pw")
    db.refresh(user)
    assert user.last_login is not None


def test_register_duplicate_username(db):
    service = AuthService(db)
    service.register_user("alice", "pw")
    with pytest.raises(ValueError):
        service.register_user("alice", "other")


def test_lookup_scales_to_many_users(db):
    service = AuthService(db)
    for name in ("alice", "bob", "carol"):
        service.register_user(name, f"pw-{name}")

    assert service.count_users() == 3
    assert service.authenticate("bob", "pw-bob").username == "bob"
    assert service.authenticate("bob", "pw-carol") is None


def test_ensure_admin_only_seeds_empty_table(db):
    service = AuthService(db)
    seeded = service.ensure_admin("admin", "admin123")
    assert seeded is not None and seeded.username == "admin"

    assert service.ensure_admin("root", "whatever") is None
    assert service.count_users() == 1


def test_session_round_trip(db):
    service = AuthService(db)
    user = service.register_user("alice", "pw")
    session = service.create_session(user.id)

    assert len(session.token) >= 32
    assert service.validate_session(session.token).id == user.id
    assert service.validate_session("unknown-token") is None


def test_expired_session_is_rejected_and_removed(db):
    service = AuthService(db)
    user = service.register_user("alice", "pw")
    session = service.create_session(user.id)
    session.expires_at = utc_now() - timedelta(minutes=1)
    db.commit()

    assert service.validate_session(session.token) is None
    assert db.query(UserSession).count() == 0


def test_logout(db):
    service = AuthService(db)
    user = service.register_user("alice", "pw")
    token = service.create_session(user.id).token

    assert service.logout(token) is True
    assert service.validate_session(token) is None
    assert service.logout(token) is False


def test_logout_all_user_sessions(db):
    service = AuthService(db)
    alice = service.register_user("alice", "pw")
    bob = service.register_user("bob", "pw")
    first = service.create_session(alice.id)
    service.create_session(alice.id)
    bob_session = service.create_session(bob.id)

    assert service.logout_all_user_sessions(alice.id) == 2
    assert service.validate_session(first.token) is None
    assert service.validate_session(bob_session.token).id == bob.id


def test_cleanup_expired_sessions(db):
    service = AuthService(db)
    user = service.register_user("alice", "pw")
    live = service.create_session(user.id)
    stale = service.create_session(user.id)
    stale.expires_at = utc_now() - timedelta(hours=1)
    db.commit()

    stale_token = stale.token

    assert service.cleanup_expired_sessions() == 1
    assert service.validate_session(live.token) is not None
    assert service.validate_session(stale_token) is None


def test_set_password(db):
    service = AuthService(db)
    user = service.register_user("alice", "old")
    service.set_password(user, "new")
    assert service.authenticate("alice", "new") is not None
    assert service.authenticate("alice", "old") is None
