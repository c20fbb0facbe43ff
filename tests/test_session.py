"""Signed session cookie."""
import jwt

from wanderlust.config import Settings
from wanderlust.services.session import Session, decode_session, encode_session

SETTINGS = Settings(secret_key="test-secret", session_max_age_minutes=30)


def test_round_trip():
    session = Session()
    session.login("tok-1", {"id": "u1", "name": "Asha", "role": "user"})
    session.flash("Welcome back!", "success")
    restored = decode_session(encode_session(session, SETTINGS), SETTINGS)
    assert restored.token == "tok-1"
    assert restored.current_user.name == "Asha"
    assert restored.flashes == [{"message": "Welcome back!", "category": "success"}]
    assert restored.is_authenticated
    assert not restored.modified


def test_password_never_cached():
    session = Session()
    session.login("tok-1", {"id": "u1", "name": "Asha", "password": "hunter2"})
    assert "password" not in session.user


def test_missing_cookie_is_anonymous():
    session = decode_session(None, SETTINGS)
    assert not session.is_authenticated
    assert not session.modified


def test_tampered_cookie_is_dropped():
    forged = jwt.encode({"token": "stolen", "user": {"id": "a1", "role": "admin"}}, "other-key", algorithm="HS256")
    session = decode_session(forged, SETTINGS)
    assert session.token is None
    assert session.user is None
    # Modified so the middleware deletes the bad cookie
    assert session.modified


def test_expired_cookie_is_dropped():
    expired = Settings(secret_key="test-secret", session_max_age_minutes=-1)
    raw = encode_session(Session(token="tok-1", user={"id": "u1"}), expired)
    session = decode_session(raw, SETTINGS)
    assert not session.is_authenticated
    assert session.modified


def test_pop_flashes_empties_queue():
    session = Session()
    session.flash("Saved.")
    assert session.pop_flashes() == [{"message": "Saved.", "category": "info"}]
    assert session.pop_flashes() == []


def test_clear():
    session = Session(token="tok", user={"id": "u1"})
    session.clear()
    assert not session.is_authenticated
    assert session.modified
