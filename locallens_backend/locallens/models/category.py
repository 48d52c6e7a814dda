# locallens/models/category.py
from dataclasses import dataclass
from typing import Optional

@dataclass
class Category:
    category_id: str
    name: str
    icon: Optional[str] = None
    sort_order: int = 0


# 저장소가 비어 있을 때 심어 두는 기본 카테고리 (순서 고정)
DEFAULT_CATEGORY_NAMES = (
    "Events",
    "Lost & Found",
    "Services",
    "News",
    "For Sale",
    "Housing",
    "Jobs",
    "Discussion",
)


def default_categories() -> list:
    return [
        Category(category_id=str(index + 1), name=name, sort_order=index)
        for index, name in enumerate(DEFAULT_CATEGORY_NAMES)
    ]
