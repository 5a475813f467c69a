from datetime import datetime, timedelta, timezone

import jwt
import pytest

from course_api.config import get_settings
from course_api.errors import AuthenticationError
from course_api.services.security import (
    JWT_ALG,
    check_admin_credentials,
    decode_session,
    sign_session,
)
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def test_session_round_trip():
    decoded = decode_session(sign_session(ADMIN_EMAIL))
    assert decoded["sub"] == ADMIN_EMAIL
    assert decoded["role"] == "admin"


def test_expired_session_is_rejected():
    token = sign_session(ADMIN_EMAIL, expires_in=timedelta(seconds=-1))
    with pytest.raises(AuthenticationError):
        decode_session(token)


def test_token_signed_with_another_secret_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": ADMIN_EMAIL, "role": "admin", "iat": now, "exp": now + timedelta(hours=1)},
        "autre-secret",
        algorithm=JWT_ALG,
    )
    with pytest.raises(AuthenticationError):
        decode_session(token)


def test_non_admin_token_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": ADMIN_EMAIL, "role": "membre", "iat": now, "exp": now + timedelta(hours=1)},
        get_settings().jwt_secret,
        algorithm=JWT_ALG,
    )
    with pytest.raises(AuthenticationError):
        decode_session(token)


def test_credentials_check():
    assert check_admin_credentials(f"  {ADMIN_EMAIL.upper()} ", ADMIN_PASSWORD)
    assert not check_admin_credentials(ADMIN_EMAIL, "faux")
    assert not check_admin_credentials("autre@traine-savates.ch", ADMIN_PASSWORD)


def test_credentials_refused_when_not_configured(monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "")
    assert not check_admin_credentials(ADMIN_EMAIL, "")
