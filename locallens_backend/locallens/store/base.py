# locallens/store/base.py
"""
문서 저장소 인터페이스.

서비스 계층은 이 인터페이스에만 의존하고, create_app 에서 설정(STORE_BACKEND)에 따라
FirestoreStore 또는 InMemoryStore 인스턴스를 주입받습니다.
모든 메서드는 dataclass 가 아닌 평범한 딕셔너리(asdict 결과)를 주고받습니다.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple


class DocumentStore(ABC):

    # --- users ---
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def get_users(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """user_id -> user 딕셔너리. 존재하지 않는 id 는 결과에서 빠집니다."""

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def find_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def create_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        이메일 중복 확인과 생성을 원자적으로 수행합니다.

        :raises DuplicateIdentityError: 같은 이메일의 사용자가 이미 있는 경우
        """

    @abstractmethod
    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    # --- posts ---
    @abstractmethod
    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def list_posts(self, category: Optional[str] = None, location: Optional[str] = None,
                   user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """필터(정확히 일치)를 적용한 게시글 목록을 created_at 내림차순으로 반환합니다."""

    @abstractmethod
    def count_posts_by_user(self, user_id: str) -> int:
        ...

    @abstractmethod
    def create_post(self, post_data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def update_post(self, post_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def delete_post(self, post_id: str) -> bool:
        ...

    @abstractmethod
    def toggle_thank(self, post_id: str, user_id: str) -> Tuple[Dict[str, Any], bool]:
        """
        user_id 의 감사 표시를 원자적으로 토글합니다.
        thanked_by 에 없으면 추가하고 thank_count +1, 있으면 제거하고 -1.

        :return: (갱신된 post 딕셔너리, 토글 후 감사 상태)
        :raises NotFoundError: 게시글이 없는 경우
        """

    @abstractmethod
    def list_locations(self) -> List[str]:
        """게시글에 등장하는 location 의 중복 없는 목록."""

    # --- categories ---
    @abstractmethod
    def list_categories(self) -> List[Dict[str, Any]]:
        """sort_order 순으로 정렬된 카테고리 목록."""

    @abstractmethod
    def add_categories(self, categories: List[Dict[str, Any]]) -> None:
        ...
