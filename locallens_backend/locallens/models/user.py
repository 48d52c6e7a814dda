# locallens/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from locallens.utils.datetime_utils import DateTimeUtils

@dataclass
class User:
    """
    'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    password_hash 는 저장소 밖으로 응답되지 않습니다. (UserResponseSchema 참고)
    """
    user_id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    avatar: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    badges: List[str] = field(default_factory=list)
