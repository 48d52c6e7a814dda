# locallens/store/memory_store.py
import copy
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from locallens.core.exceptions import DuplicateIdentityError, NotFoundError
from locallens.store.base import DocumentStore


class InMemoryStore(DocumentStore):
    """
    프로세스 메모리에 문서를 보관하는 저장소 구현.
    테스트와 로컬 개발(STORE_BACKEND=memory)에서 사용하며, 앱 인스턴스마다 새로 생성됩니다.
    읽기/쓰기 모두 사본을 주고받으므로 호출자가 내부 상태를 직접 바꿀 수 없습니다.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._users: Dict[str, Dict[str, Any]] = {}
        self._posts: Dict[str, Dict[str, Any]] = {}
        self._categories: Dict[str, Dict[str, Any]] = {}

    def init_app(self, app) -> None:
        logging.info("InMemoryStore: 인메모리 저장소를 사용합니다. 데이터는 프로세스 종료 시 사라집니다.")

    # --- users ---
    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._users.get(user_id))

    def get_users(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return {uid: copy.deepcopy(self._users[uid]) for uid in set(user_ids) if uid in self._users}

    def find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            user = next((u for u in self._users.values() if u['email'] == email), None)
            return copy.deepcopy(user)

    def find_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            user = next((u for u in self._users.values() if u['username'] == username), None)
            return copy.deepcopy(user)

    def create_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            if any(u['email'] == user_data['email'] for u in self._users.values()):
                raise DuplicateIdentityError()
            self._users[user_data['user_id']] = copy.deepcopy(user_data)
            return copy.deepcopy(user_data)

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            user.update(copy.deepcopy(fields))
            return copy.deepcopy(user)

    # --- posts ---
    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._posts.get(post_id))

    def list_posts(self, category: Optional[str] = None, location: Optional[str] = None,
                   user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        with self._lock:
            posts = [
                p for p in self._posts.values()
                if (category is None or p['category'] == category)
                and (location is None or p['location'] == location)
                and (user_id is None or p['user_id'] == user_id)
            ]
            posts.sort(key=lambda p: p['created_at'], reverse=True)
            return copy.deepcopy(posts)

    def count_posts_by_user(self, user_id: str) -> int:
        with self._lock:
            return sum(1 for p in self._posts.values() if p['user_id'] == user_id)

    def create_post(self, post_data: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            self._posts[post_data['post_id']] = copy.deepcopy(post_data)
            return copy.deepcopy(post_data)

    def update_post(self, post_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                return None
            post.update(copy.deepcopy(fields))
            return copy.deepcopy(post)

    def delete_post(self, post_id: str) -> bool:
        with self._lock:
            return self._posts.pop(post_id, None) is not None

    def toggle_thank(self, post_id: str, user_id: str) -> Tuple[Dict[str, Any], bool]:
        # 확인-후-갱신 전체를 하나의 락 구간에서 수행합니다.
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                raise NotFoundError("Post not found")

            if user_id in post['thanked_by']:
                post['thanked_by'].remove(user_id)
                post['thank_count'] -= 1
                is_thanked = False
            else:
                post['thanked_by'].append(user_id)
                post['thank_count'] += 1
                is_thanked = True
            return copy.deepcopy(post), is_thanked

    def list_locations(self) -> List[str]:
        with self._lock:
            return list({p['location'] for p in self._posts.values()})

    # --- categories ---
    def list_categories(self) -> List[Dict[str, Any]]:
        with self._lock:
            categories = sorted(self._categories.values(), key=lambda c: c['sort_order'])
            return copy.deepcopy(categories)

    def add_categories(self, categories: List[Dict[str, Any]]) -> None:
        with self._lock:
            for category in categories:
                self._categories[category['category_id']] = copy.deepcopy(category)
