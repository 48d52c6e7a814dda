# locallens/api/posts/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, List

from locallens.core.exceptions import ForbiddenError, NotFoundError
from locallens.models.post import Post
from locallens.store.base import DocumentStore
from locallens.utils.datetime_utils import DateTimeUtils

UNKNOWN_AUTHOR_NAME = "Unknown User"
SORT_OPTIONS = ("recent", "popular")
EDITABLE_FIELDS = ("title", "content", "category", "location")


class PostService:
    """
    게시글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 조회 시점에 작성자 정보(username, avatar)를 붙여 PostView 딕셔너리를 만듭니다.
    - 감사(thank) 토글은 저장소의 원자적 연산에 위임합니다.
    """
    def __init__(self, store: DocumentStore, default_avatar_url: str):
        self.store = store
        self.default_avatar_url = default_avatar_url

    def _author_snapshot(self, author_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        # 작성자가 사라졌어도 목록 조회는 실패하지 않습니다.
        if not author_data:
            return {"username": UNKNOWN_AUTHOR_NAME, "avatar": self.default_avatar_url}
        return {
            "username": author_data.get("username"),
            "avatar": author_data.get("avatar") or self.default_avatar_url
        }

    def _to_view(self, post_data: Dict[str, Any], authors: Dict[str, Dict[str, Any]],
                 current_user_id: Optional[str], is_thanked: Optional[bool] = None) -> Dict[str, Any]:
        view = dict(post_data)
        view['author'] = self._author_snapshot(authors.get(post_data['user_id']))
        if is_thanked is None:
            is_thanked = bool(current_user_id) and current_user_id in post_data.get('thanked_by', [])
        view['thanked_by_user'] = is_thanked
        return view

    def list_posts(self, category: Optional[str] = None, location: Optional[str] = None,
                   user_id: Optional[str] = None, sort: str = "recent",
                   current_user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        필터를 적용한 게시글 목록을 반환합니다.
        'recent' 는 최신순, 'popular' 는 같은 결과를 thank_count 내림차순으로 다시 정렬합니다. (동점이면 최신순 유지)
        """
        if sort not in SORT_OPTIONS:
            raise ValueError(f"지원하지 않는 정렬 옵션입니다: {sort}")

        posts = self.store.list_posts(category=category or None, location=location or None, user_id=user_id or None)
        if sort == "popular":
            posts.sort(key=lambda p: p.get('thank_count', 0), reverse=True)

        authors = self.store.get_users(p['user_id'] for p in posts)
        return [self._to_view(p, authors, current_user_id) for p in posts]

    def get_post(self, post_id: str, current_user_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        post_data = self.store.get_post(post_id)
        if post_data is None:
            return None
        authors = self.store.get_users([post_data['user_id']])
        return self._to_view(post_data, authors, current_user_id)

    def create_post(self, author_id: str, title: str, content: str, category: str, location: str) -> Dict[str, Any]:
        """새로운 게시글을 생성합니다. 작성자가 존재하지 않으면 NotFoundError."""
        author_data = self.store.get_user(author_id)
        if author_data is None:
            raise NotFoundError("User not found")

        new_post = Post(
            post_id=str(uuid.uuid4()),
            user_id=author_id,
            title=title,
            content=content,
            category=category,
            location=location
        )
        post_data = self.store.create_post(asdict(new_post))
        logging.info(f"게시글 생성 완료 (post_id: {new_post.post_id}, user_id: {author_id})")
        return self._to_view(post_data, {author_id: author_data}, author_id)

    def _get_owned_post(self, post_id: str, user_id: str) -> Dict[str, Any]:
        post_data = self.store.get_post(post_id)
        if post_data is None:
            raise NotFoundError("Post not found")
        if post_data['user_id'] != user_id:
            raise ForbiddenError()
        return post_data

    def update_post(self, post_id: str, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """[작성자 전용] 제목/내용/카테고리/지역만 수정할 수 있습니다."""
        self._get_owned_post(post_id, user_id)

        update_data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        update_data['updated_at'] = DateTimeUtils.now()
        post_data = self.store.update_post(post_id, update_data)
        if post_data is None:
            raise NotFoundError("Post not found")

        authors = self.store.get_users([post_data['user_id']])
        return self._to_view(post_data, authors, user_id)

    def delete_post(self, post_id: str, user_id: str) -> None:
        """[작성자 전용] 게시글을 삭제합니다."""
        self._get_owned_post(post_id, user_id)
        self.store.delete_post(post_id)
        logging.info(f"게시글 삭제 완료 (post_id: {post_id}, user_id: {user_id})")

    def toggle_thank(self, post_id: str, user_id: str) -> Dict[str, Any]:
        """
        감사 표시를 누르거나 취소합니다. 멱등이 아닌 토글이므로 두 번 호출하면 원래 상태로 돌아갑니다.
        반환되는 PostView 의 thanked_by_user 는 토글 이후의 상태입니다.
        """
        post_data, is_thanked = self.store.toggle_thank(post_id, user_id)
        authors = self.store.get_users([post_data['user_id']])
        return self._to_view(post_data, authors, user_id, is_thanked=is_thanked)
