# locallens/store/__init__.py
from flask import Flask

from .base import DocumentStore
from .firestore_store import FirestoreStore
from .memory_store import InMemoryStore


def create_store(app: Flask) -> DocumentStore:
    """STORE_BACKEND 설정에 맞는 저장소를 만들고 앱에 연결합니다."""
    backend = app.config.get('STORE_BACKEND', 'firestore')
    if backend == 'memory':
        store = InMemoryStore()
    elif backend == 'firestore':
        store = FirestoreStore()
    else:
        raise ValueError(f"지원하지 않는 STORE_BACKEND 입니다: {backend}")
    store.init_app(app)
    return store


__all__ = ['DocumentStore', 'FirestoreStore', 'InMemoryStore', 'create_store']
