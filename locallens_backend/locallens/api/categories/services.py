# locallens/api/categories/services.py
import logging
from dataclasses import asdict
from typing import Any, Dict, List

from locallens.models.category import default_categories
from locallens.store.base import DocumentStore


class CategoryService:
    """카테고리와 지역(location) 선택지를 제공하는 서비스 클래스."""

    def __init__(self, store: DocumentStore, default_locations: List[str]):
        self.store = store
        self.default_locations = list(default_locations)

    def list_categories(self) -> List[Dict[str, Any]]:
        """저장된 카테고리를 반환합니다. 비어 있으면 기본 카테고리 8개를 심은 뒤 반환합니다."""
        categories = self.store.list_categories()
        if categories:
            return categories

        seeded = [asdict(category) for category in default_categories()]
        self.store.add_categories(seeded)
        logging.info(f"기본 카테고리 {len(seeded)}개를 저장소에 추가했습니다.")
        return seeded

    def list_locations(self) -> List[str]:
        """게시글에 등장하는 지역 목록(알파벳순). 게시글이 없으면 기본 지역 목록."""
        locations = self.store.list_locations()
        if not locations:
            return list(self.default_locations)
        return sorted(locations)
