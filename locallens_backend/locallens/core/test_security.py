# locallens/core/test_security.py
"""비밀번호 해싱과 세션 토큰 발급/검증 테스트"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from flask_jwt_extended import create_access_token

from locallens.core import security
from locallens.core.exceptions import InvalidTokenError


def test_hash_password_is_salted():
    """같은 비밀번호라도 해시는 매번 달라야 하고, 평문은 해시에 남지 않아야 함"""
    first = security.hash_password("secret123")
    second = security.hash_password("secret123")

    assert first != second
    assert "secret123" not in first
    assert security.verify_password("secret123", first)
    assert security.verify_password("secret123", second)
    assert not security.verify_password("wrong-password", first)


def test_session_token_round_trip(app):
    """발급한 토큰은 같은 user_id 로 해독되고 24시간 뒤 만료"""
    with app.app_context():
        token = security.issue_session_token("user-1")
        claims = security.decode_session_token(token)

    assert claims["sub"] == "user-1"
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_decode_rejects_token_signed_with_other_secret(app):
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {"sub": "user-1", "iat": now, "nbf": now, "exp": now + timedelta(hours=24),
         "jti": "forged", "type": "access", "fresh": False},
        "some-other-secret-key-that-is-long-enough",
        algorithm="HS256",
    )
    with app.app_context():
        with pytest.raises(InvalidTokenError):
            security.decode_session_token(forged)


def test_decode_rejects_expired_token(app):
    with app.app_context():
        expired = create_access_token(identity="user-1", expires_delta=timedelta(seconds=-1))
        with pytest.raises(InvalidTokenError):
            security.decode_session_token(expired)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_decode_rejects_malformed_token(app, token):
    with app.app_context():
        with pytest.raises(InvalidTokenError):
            security.decode_session_token(token)
