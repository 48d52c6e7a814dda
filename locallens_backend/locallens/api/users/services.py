# locallens/api/users/services.py
import logging
from typing import Any, Dict, Optional

from locallens.core.exceptions import NotFoundError
from locallens.store.base import DocumentStore

PROFILE_FIELDS = ("avatar", "bio", "location")


class UserService:
    """사용자 프로필 조회/수정을 담당하는 서비스 클래스."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_public_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """공개 프로필 정보와 작성한 게시글 수를 반환합니다. 이메일, 비밀번호 해시는 스키마에서 제외됩니다."""
        user_data = self.store.get_user(user_id)
        if user_data is None:
            return None
        user_data['post_count'] = self.store.count_posts_by_user(user_id)
        return user_data

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        update_data = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
        if not update_data:
            user_data = self.store.get_user(user_id)
        else:
            user_data = self.store.update_user(user_id, update_data)
        if user_data is None:
            raise NotFoundError("User not found")
        logging.info(f"프로필 수정 완료 (user_id: {user_id}, fields: {sorted(update_data)})")
        return user_data
