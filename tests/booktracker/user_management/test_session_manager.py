from datetime import timedelta

import pytest

from booktracker.errors import UnauthenticatedError
from booktracker.user_management import SessionManager

pytestmark = pytest.mark.auth


def test_issue_and_resolve_session(session_manager, make_user):
    user_id = make_user("alice")

    token = session_manager.issue_session(user_id)

    assert len(token) == 64
    assert session_manager.resolve_session(token) == user_id


def test_tokens_are_unique_and_concurrent(session_manager, make_user):
    user_id = make_user("bob")

    first = session_manager.issue_session(user_id)
    second = session_manager.issue_session(user_id)

    assert first != second
    assert session_manager.resolve_session(first) == user_id
    assert session_manager.resolve_session(second) == user_id


def test_session_expires_at_the_exact_boundary(session_manager, make_user, clock):
    user_id = make_user("carol")
    token = session_manager.issue_session(user_id, ttl=timedelta(minutes=30))

    clock.advance(timedelta(minutes=30) - timedelta(microseconds=1))
    assert session_manager.resolve_session(token) == user_id

    clock.advance(timedelta(microseconds=1))
    with pytest.raises(UnauthenticatedError):
        session_manager.resolve_session(token)

    clock.advance(timedelta(days=1))
    with pytest.raises(UnauthenticatedError):
        session_manager.resolve_session(token)


def test_default_ttl_comes_from_the_manager(session_manager, make_user, clock):
    token = session_manager.issue_session(make_user("dave"))

    record = session_manager.get_session(token)

    assert record is not None
    assert record.expires_at - record.created_at == session_manager.ttl
    assert record.created_at == clock.now


@pytest.mark.parametrize("token", [None, "", "   ", "not-a-real-token"])
def test_missing_or_unknown_tokens_are_unauthenticated(session_manager, token):
    with pytest.raises(UnauthenticatedError):
        session_manager.resolve_session(token)


def test_revoke_is_idempotent(session_manager, make_user):
    token = session_manager.issue_session(make_user("erin"))

    assert session_manager.revoke_session(token) is True
    with pytest.raises(UnauthenticatedError):
        session_manager.resolve_session(token)

    assert session_manager.revoke_session(token) is False
    assert session_manager.revoke_session("never-issued") is False


def test_clear_sessions_for_user(session_manager, make_user):
    frank = make_user("frank")
    grace = make_user("grace")
    frank_tokens = [session_manager.issue_session(frank) for _ in range(2)]
    grace_token = session_manager.issue_session(grace)

    assert session_manager.clear_sessions_for_user(frank) == 2

    for token in frank_tokens:
        with pytest.raises(UnauthenticatedError):
            session_manager.resolve_session(token)
    assert session_manager.resolve_session(grace_token) == grace


def test_purge_expired_removes_only_expired_rows(session_manager, make_user, clock):
    user_id = make_user("heidi")
    short = session_manager.issue_session(user_id, ttl=timedelta(minutes=5))
    long = session_manager.issue_session(user_id, ttl=timedelta(hours=2))

    clock.advance(timedelta(minutes=5))

    assert session_manager.purge_expired() == 1
    assert session_manager.get_session(short) is None
    assert session_manager.resolve_session(long) == user_id


def test_non_positive_ttl_is_rejected(database, session_manager, make_user):
    with pytest.raises(ValueError):
        session_manager.issue_session(make_user("ivan"), ttl=timedelta(0))
    with pytest.raises(ValueError):
        SessionManager(database, ttl=timedelta(seconds=-1))


def test_custom_token_factory(database, clock, make_user):
    manager = SessionManager(database, clock=clock, token_factory=lambda: "f" * 64)
    user_id = make_user("judy")

    assert manager.issue_session(user_id) == "f" * 64
    assert manager.resolve_session("f" * 64) == user_id


def test_padded_token_is_revoked_like_it_resolves(session_manager, make_user):
    user_id = make_user("kate")
    token = session_manager.issue_session(user_id)
    padded = f"  {token}\n"

    assert session_manager.resolve_session(padded) == user_id
    assert session_manager.get_session(padded).user_id == user_id

    assert session_manager.revoke_session(padded) is True
    with pytest.raises(UnauthenticatedError):
        session_manager.resolve_session(padded)
    with pytest.raises(UnauthenticatedError):
        session_manager.resolve_session(token)
    assert session_manager.get_session(padded) is None


@pytest.mark.parametrize("token", [None, "", "   "])
def test_blank_tokens_are_never_found(session_manager, token):
    assert session_manager.get_session(token) is None
    assert session_manager.revoke_session(token) is False
