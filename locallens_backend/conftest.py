# conftest.py
"""
공용 pytest fixture

사용법: python -m pytest -v
테스트는 TestingConfig(인메모리 저장소)로 만든 앱을 사용하므로 Firestore 없이 실행됩니다.
"""

import pytest

from locallens import create_app


VALID_POST = {
    "title": "Lost cat near the park",
    "content": "Grey tabby, answers to Milo. Last seen near the main park gate.",
    "category": "Lost & Found",
    "location": "Erode",
}


@pytest.fixture
def app():
    app = create_app('testing')
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.store


@pytest.fixture
def register(client):
    """회원가입 후 (token, user) 를 돌려주는 헬퍼."""
    def _register(username="alice", email="a@x.com", password="secret123"):
        res = client.post('/api/auth/register', json={"username": username, "email": email, "password": password})
        assert res.status_code == 201, res.get_json()
        body = res.get_json()
        return body["token"], body["user"]
    return _register


@pytest.fixture
def create_post(client):
    """게시글 작성 후 PostView JSON 을 돌려주는 헬퍼."""
    def _create_post(token, **overrides):
        payload = dict(VALID_POST, **overrides)
        res = client.post('/api/posts', json=payload, headers={"x-auth-token": token})
        assert res.status_code == 201, res.get_json()
        return res.get_json()
    return _create_post
