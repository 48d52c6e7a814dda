# locallens/api/posts/test_services.py
"""PostService 단위 테스트 (인메모리 저장소 사용)"""

from dataclasses import asdict
from datetime import datetime, timedelta, timezone

import pytest

from locallens.api.posts.services import PostService, UNKNOWN_AUTHOR_NAME
from locallens.core.exceptions import ForbiddenError, NotFoundError
from locallens.models.post import Post
from locallens.models.user import User
from locallens.store.memory_store import InMemoryStore

DEFAULT_AVATAR = "/placeholder.svg"
BASE_TIME = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def store():
    store = InMemoryStore()
    store.create_user(asdict(User(user_id="u1", username="alice", email="a@x.com", password_hash="x",
                                  avatar="https://img.example.com/alice.png")))
    store.create_user(asdict(User(user_id="u2", username="bob", email="b@x.com", password_hash="x")))
    return store


@pytest.fixture
def service(store):
    return PostService(store, default_avatar_url=DEFAULT_AVATAR)


def _add_post(store, post_id, minutes, user_id="u1", category="Events", location="Erode", thank_count=0):
    post = Post(post_id=post_id, user_id=user_id, title=f"Post {post_id}", content="content " * 5,
                category=category, location=location,
                thanked_by=[f"fan-{i}" for i in range(thank_count)], thank_count=thank_count,
                created_at=BASE_TIME + timedelta(minutes=minutes))
    store.create_post(asdict(post))


def test_create_post_starts_with_empty_counters(service):
    view = service.create_post("u1", "Yard sale", "Selling furniture this Sunday morning.", "For Sale", "Salem")

    assert view["thank_count"] == 0
    assert view["thanked_by"] == []
    assert view["comment_count"] == 0
    assert view["thanked_by_user"] is False
    assert view["author"] == {"username": "alice", "avatar": "https://img.example.com/alice.png"}


def test_create_post_with_unknown_author_fails(service):
    with pytest.raises(NotFoundError):
        service.create_post("ghost", "Yard sale", "Selling furniture this Sunday morning.", "For Sale", "Salem")


def test_toggle_thank_keeps_count_equal_to_thanked_by(service, store):
    """토글 전후로 thank_count == len(thanked_by) 불변식이 유지되어야 함"""
    _add_post(store, "p1", minutes=0)

    for user_id in ["u1", "u2", "u1", "u2", "u2"]:
        view = service.toggle_thank("p1", user_id)
        stored = store.get_post("p1")
        assert stored["thank_count"] == len(stored["thanked_by"])
        assert view["thank_count"] == stored["thank_count"]
        assert len(set(stored["thanked_by"])) == len(stored["thanked_by"])

    assert store.get_post("p1")["thanked_by"] == ["u2"]


def test_toggle_thank_twice_restores_original_state(service, store):
    _add_post(store, "p1", minutes=0)

    first = service.toggle_thank("p1", "u2")
    second = service.toggle_thank("p1", "u2")

    assert (first["thank_count"], first["thanked_by_user"]) == (1, True)
    assert (second["thank_count"], second["thanked_by_user"]) == (0, False)


def test_toggle_thank_does_not_touch_post_content(service, store):
    _add_post(store, "p1", minutes=0)
    before = store.get_post("p1")

    service.toggle_thank("p1", "u2")
    after = store.get_post("p1")

    for key in ("title", "content", "category", "location", "user_id", "created_at"):
        assert after[key] == before[key]


def test_toggle_thank_unknown_post(service):
    with pytest.raises(NotFoundError):
        service.toggle_thank("missing", "u1")


def test_list_filters_by_exact_category_newest_first(service, store):
    _add_post(store, "old-event", minutes=0, category="Events")
    _add_post(store, "news", minutes=5, category="News")
    _add_post(store, "new-event", minutes=10, category="Events")
    _add_post(store, "lowercase", minutes=20, category="events")

    posts = service.list_posts(category="Events")

    assert [p["post_id"] for p in posts] == ["new-event", "old-event"]


def test_list_filters_by_category_and_location(service, store):
    _add_post(store, "a", minutes=0, category="Events", location="Erode")
    _add_post(store, "b", minutes=1, category="Events", location="Salem")
    _add_post(store, "c", minutes=2, category="Jobs", location="Salem")

    assert [p["post_id"] for p in service.list_posts(category="Events", location="Salem")] == ["b"]
    assert [p["post_id"] for p in service.list_posts(location="Salem")] == ["c", "b"]
    # 빈 문자열 필터는 필터 없음으로 취급
    assert len(service.list_posts(category="", location="")) == 3


def test_list_by_author(service, store):
    _add_post(store, "a", minutes=0, user_id="u1")
    _add_post(store, "b", minutes=1, user_id="u2")

    assert [p["post_id"] for p in service.list_posts(user_id="u2")] == ["b"]


def test_popular_sort_orders_by_thank_count_then_recency(service, store):
    _add_post(store, "quiet", minutes=30, thank_count=0)
    _add_post(store, "hit-old", minutes=0, thank_count=3)
    _add_post(store, "hit-new", minutes=10, thank_count=3)
    _add_post(store, "mid", minutes=20, thank_count=1)

    posts = service.list_posts(sort="popular")

    assert [p["post_id"] for p in posts] == ["hit-new", "hit-old", "mid", "quiet"]


def test_unknown_sort_option_is_rejected(service):
    with pytest.raises(ValueError):
        service.list_posts(sort="random")


def test_missing_author_gets_placeholder(service, store):
    _add_post(store, "orphan", minutes=0, user_id="deleted-user")

    [view] = service.list_posts()

    assert view["author"] == {"username": UNKNOWN_AUTHOR_NAME, "avatar": DEFAULT_AVATAR}


def test_author_without_avatar_gets_default_avatar(service, store):
    _add_post(store, "p1", minutes=0, user_id="u2")
    assert service.get_post("p1")["author"] == {"username": "bob", "avatar": DEFAULT_AVATAR}


def test_thanked_by_user_reflects_current_user(service, store):
    _add_post(store, "p1", minutes=0)
    service.toggle_thank("p1", "u2")

    assert service.get_post("p1", current_user_id="u2")["thanked_by_user"] is True
    assert service.get_post("p1", current_user_id="u1")["thanked_by_user"] is False
    assert service.get_post("p1")["thanked_by_user"] is False
    assert service.get_post("missing") is None


def test_update_post_only_by_author_and_only_editable_fields(service, store):
    _add_post(store, "p1", minutes=0, user_id="u1")
    service.toggle_thank("p1", "u2")

    with pytest.raises(ForbiddenError):
        service.update_post("p1", "u2", {"title": "Hijacked title"})

    view = service.update_post("p1", "u1", {"title": "Updated title", "thank_count": 99, "user_id": "u2"})

    assert view["title"] == "Updated title"
    assert view["thank_count"] == 1
    assert view["user_id"] == "u1"
    assert view["updated_at"] > view["created_at"]

    with pytest.raises(NotFoundError):
        service.update_post("missing", "u1", {"title": "Nope nope"})


def test_delete_post_only_by_author(service, store):
    _add_post(store, "p1", minutes=0, user_id="u1")

    with pytest.raises(ForbiddenError):
        service.delete_post("p1", "u2")
    service.delete_post("p1", "u1")

    assert store.get_post("p1") is None
    with pytest.raises(NotFoundError):
        service.delete_post("p1", "u1")
