# locallens_client/test_api.py
"""LocalLensClient 테스트 (네트워크 없이 가짜 세션 사용)"""

import pytest
import requests

from locallens_client import LocalLensClient, ApiError
from locallens_client.api import FALLBACK_CATEGORIES, FALLBACK_LOCATIONS


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json body")
        return self._body


class FakeSession:
    """요청을 기록하고 미리 정해 둔 응답(또는 예외)을 차례로 돌려줍니다."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


SESSION_BODY = {"token": "tok-123", "user": {"id": "u1", "username": "alice"}}


def test_login_stores_token_and_sends_it_afterwards():
    session = FakeSession(FakeResponse(200, SESSION_BODY), FakeResponse(201, {"id": "p1"}))
    client = LocalLensClient("http://api.test/api/", session=session)

    user = client.login("a@x.com", "secret123")
    client.create_post("Lost cat near the park", "Grey tabby, answers to Milo.", "Lost & Found", "Erode")

    assert user["id"] == "u1"
    login_call, create_call = session.calls
    assert login_call[1] == "http://api.test/api/auth/login"
    assert "x-auth-token" not in login_call[2]["headers"]
    assert create_call[2]["headers"]["x-auth-token"] == "tok-123"
    assert create_call[2]["timeout"] == client.timeout


def test_error_response_raises_api_error_with_server_message():
    session = FakeSession(FakeResponse(400, {"error_code": "INVALID_CREDENTIALS", "msg": "Invalid Credentials"}))
    client = LocalLensClient(session=session)

    with pytest.raises(ApiError) as excinfo:
        client.login("a@x.com", "wrong")

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Invalid Credentials"
    assert client.token is None


def test_fallback_used_only_when_enabled():
    down = requests.ConnectionError("connection refused")

    with pytest.raises(ApiError):
        LocalLensClient(session=FakeSession(down)).fetch_categories()

    client = LocalLensClient(use_fallback_data=True, session=FakeSession(down, FakeResponse(503)))
    assert client.fetch_categories() == FALLBACK_CATEGORIES
    assert client.fetch_locations() == FALLBACK_LOCATIONS


def test_fallback_does_not_mask_client_errors():
    client = LocalLensClient(use_fallback_data=True, session=FakeSession(FakeResponse(404, {"msg": "Not found"})))
    with pytest.raises(ApiError) as excinfo:
        client.fetch_locations()
    assert excinfo.value.status_code == 404


def test_get_current_user_clears_session_on_401():
    session = FakeSession(FakeResponse(200, SESSION_BODY), FakeResponse(401, {"msg": "Token is not valid"}))
    client = LocalLensClient(session=session)
    client.login("a@x.com", "secret123")

    assert client.get_current_user() is None
    assert client.token is None
    assert client.user is None


def test_get_current_user_without_token_makes_no_request():
    session = FakeSession()
    assert LocalLensClient(session=session).get_current_user() is None
    assert session.calls == []


def test_fetch_post_not_found_returns_none():
    client = LocalLensClient(session=FakeSession(FakeResponse(404, {"msg": "Post not found"})))
    assert client.fetch_post("missing") is None


def test_fetch_posts_drops_empty_filters():
    session = FakeSession(FakeResponse(200, []))
    LocalLensClient(session=session).fetch_posts(category="Events", location="", sort="popular")

    assert session.calls[0][2]["params"] == {"category": "Events", "sort": "popular"}
