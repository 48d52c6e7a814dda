# locallens/store/test_memory_store.py
"""InMemoryStore 테스트 - 특히 감사 토글의 원자성"""

import threading
from dataclasses import asdict

import pytest

from locallens.core.exceptions import DuplicateIdentityError, NotFoundError
from locallens.models.post import Post
from locallens.store.memory_store import InMemoryStore


@pytest.fixture
def store():
    store = InMemoryStore()
    store.create_post(asdict(Post(post_id="p1", user_id="author", title="Title", content="Body",
                                  category="News", location="Erode")))
    return store


def _run_concurrently(target, args_list):
    threads = [threading.Thread(target=target, args=args) for args in args_list]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def test_concurrent_toggles_by_different_users(store):
    """동시에 들어온 토글이 서로의 갱신을 덮어쓰지 않아야 함"""
    user_ids = [f"user-{i}" for i in range(50)]
    _run_concurrently(store.toggle_thank, [("p1", uid) for uid in user_ids])

    post = store.get_post("p1")
    assert post["thank_count"] == 50
    assert sorted(post["thanked_by"]) == sorted(user_ids)


def test_concurrent_toggles_by_same_user(store):
    """같은 사용자가 짝수 번 토글하면 원래 상태로 돌아와야 함"""
    _run_concurrently(store.toggle_thank, [("p1", "same-user")] * 20)

    post = store.get_post("p1")
    assert post["thank_count"] == len(post["thanked_by"]) == 0


def test_toggle_unknown_post(store):
    with pytest.raises(NotFoundError):
        store.toggle_thank("missing", "user")


def test_returned_documents_are_copies(store):
    post = store.get_post("p1")
    post["thanked_by"].append("intruder")
    post["title"] = "changed"

    fresh = store.get_post("p1")
    assert fresh["thanked_by"] == []
    assert fresh["title"] == "Title"


def test_find_user_and_update(store):
    store.create_user({"user_id": "u1", "username": "alice", "email": "a@x.com", "password_hash": "x"})

    assert store.find_user_by_email("a@x.com")["user_id"] == "u1"
    assert store.find_user_by_username("alice")["user_id"] == "u1"
    assert store.find_user_by_email("b@x.com") is None
    assert store.update_user("u1", {"bio": "hi"})["bio"] == "hi"
    assert store.update_user("nobody", {"bio": "hi"}) is None
    assert store.get_users(["u1", "nobody"]).keys() == {"u1"}


def test_create_user_rejects_duplicate_email(store):
    store.create_user({"user_id": "u1", "username": "alice", "email": "a@x.com", "password_hash": "x"})

    with pytest.raises(DuplicateIdentityError):
        store.create_user({"user_id": "u2", "username": "alice2", "email": "a@x.com", "password_hash": "y"})
    assert store.get_user("u2") is None
