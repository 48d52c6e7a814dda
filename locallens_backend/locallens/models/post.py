# locallens/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from locallens.utils.datetime_utils import DateTimeUtils

@dataclass
class Post:
    """
    'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    thank_count 는 항상 len(thanked_by) 와 같아야 합니다.
    """
    post_id: str
    user_id: str
    title: str
    content: str
    category: str
    location: str
    thank_count: int = 0
    thanked_by: List[str] = field(default_factory=list)
    comment_count: int = 0  # 댓글 기능은 없으므로 항상 0
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)
