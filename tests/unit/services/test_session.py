"""
Unit tests for session data, flash messages and the signed session cookie
"""
from datetime import UTC, datetime, timedelta

from jose import jwt

from admin_panel.api.utils.session_token import ALGORITHM, decode_session, encode_session
from admin_panel.app.services.session import (
    SessionData,
    flash,
    pop_fieldset,
    pop_flashes,
    set_fieldset,
)
from admin_panel.config import AdminPanelConfig


def test_session_tracks_modification():
    session = SessionData({"a": 1})
    assert session.modified is False

    session.pop("missing")
    assert session.modified is False

    session["b"] = 2
    assert session.modified is True
    assert session.to_dict() == {"a": 1, "b": 2}


def test_flash_messages_are_one_shot():
    session = SessionData()
    flash(session, "success", "User created")
    flash(session, "error", "Something else")

    assert pop_flashes(session) == [
        {"kind": "success", "message": "User created"},
        {"kind": "error", "message": "Something else"},
    ]
    assert pop_flashes(session) == []


def test_fieldset_is_one_shot():
    session = SessionData()
    set_fieldset(session, {"errors": {"email": ["E-mail is already in use"]}})

    assert pop_fieldset(session)["errors"] == {"email": ["E-mail is already in use"]}
    assert pop_fieldset(session) == {}


def test_session_cookie_roundtrip(config):
    token = encode_session({"backend_user_id": 3}, config)

    assert decode_session(token, config) == {"backend_user_id": 3}


def test_session_cookie_with_other_secret_is_rejected(config):
    token = encode_session({"backend_user_id": 3}, config)
    other = AdminPanelConfig(SESSION_SECRET="another-secret")

    assert decode_session(token, other) is None


def test_expired_session_cookie_is_rejected(config):
    past = datetime.now(UTC) - timedelta(hours=1)
    token = jwt.encode(
        {"data": {"backend_user_id": 3}, "exp": past, "iat": past - timedelta(hours=1)},
        config.SESSION_SECRET,
        algorithm=ALGORITHM,
    )

    assert decode_session(token, config) is None


def test_garbage_session_cookie_is_rejected(config):
    assert decode_session("garbage", config) is None
