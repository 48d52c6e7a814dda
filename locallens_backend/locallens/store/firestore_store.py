# locallens/store/firestore_store.py
import functools
import hashlib
import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

import firebase_admin
from firebase_admin import credentials, firestore
from flask import Flask
from google.api_core import exceptions as gcp_exceptions

from locallens.core.exceptions import DuplicateIdentityError, NotFoundError, StoreUnavailableError
from locallens.store.base import DocumentStore
from locallens.utils.datetime_utils import DateTimeUtils


def _translate_store_errors(func):
    """Google API 오류(시간 초과, 연결 실패 등)를 재시도 가능한 StoreUnavailableError 로 바꿉니다."""
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except gcp_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 호출 실패 ({func.__name__}): {e}", exc_info=True)
            raise StoreUnavailableError() from e
    return wrapper


class FirestoreStore(DocumentStore):
    """
    Firestore 기반 저장소 구현.
    - users, posts, categories 컬렉션의 문서 id 는 각 엔티티의 id 와 같습니다.
      user_emails 컬렉션은 이메일 중복 가입을 막기 위한 예약 문서입니다.
    - 모든 호출에 STORE_TIMEOUT_SECONDS 만큼의 timeout 을 전달합니다.
    - 필터 + created_at 정렬 조합은 Firestore 복합 인덱스가 필요합니다.
      (category/created_at, location/created_at, user_id/created_at 등)
    """

    def __init__(self):
        """실제 클라이언트는 init_app 에서 주입됩니다."""
        self.db = None
        self.users_ref = None
        self.user_emails_ref = None
        self.posts_ref = None
        self.categories_ref = None
        self.timeout: Optional[float] = None

    def init_app(self, app: Flask):
        """
        앱 초기화 과정에서 단 한 번 호출됩니다.
        인증 파일이 없거나 Firestore 에 접속할 수 없으면 예외를 그대로 올려 서버 시작을 중단합니다.
        """
        if not firebase_admin._apps:
            cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
            if not cred_path or not os.path.exists(cred_path):
                raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
            cred = credentials.Certificate(cred_path)
            firebase_admin.initialize_app(cred)

        self.db = firestore.client()
        self.users_ref = self.db.collection('users')
        self.user_emails_ref = self.db.collection('user_emails')
        self.posts_ref = self.db.collection('posts')
        self.categories_ref = self.db.collection('categories')
        self.timeout = app.config.get('STORE_TIMEOUT_SECONDS', 10)

        self.ping()
        logging.info("FirestoreStore: Firestore 저장소가 성공적으로 초기화되었습니다.")

    @_translate_store_errors
    def ping(self) -> None:
        self.categories_ref.limit(1).get(timeout=self.timeout)

    @staticmethod
    def _to_dict(doc) -> Dict[str, Any]:
        return DateTimeUtils.from_firestore(doc.to_dict())

    # --- users ---
    @_translate_store_errors
    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        doc = self.users_ref.document(user_id).get(timeout=self.timeout)
        return self._to_dict(doc) if doc.exists else None

    @_translate_store_errors
    def get_users(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        refs = [self.users_ref.document(uid) for uid in set(user_ids)]
        if not refs:
            return {}
        return {doc.id: self._to_dict(doc) for doc in self.db.get_all(refs, timeout=self.timeout) if doc.exists}

    @_translate_store_errors
    def find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        query = self.users_ref.where('email', '==', email).limit(1).stream(timeout=self.timeout)
        user_doc = next(query, None)
        return self._to_dict(user_doc) if user_doc else None

    @_translate_store_errors
    def find_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        query = self.users_ref.where('username', '==', username).limit(1).stream(timeout=self.timeout)
        user_doc = next(query, None)
        return self._to_dict(user_doc) if user_doc else None

    @staticmethod
    def _email_key(email: str) -> str:
        # 이메일에는 문서 id 로 쓸 수 없는 '/' 가 들어갈 수 있습니다.
        return hashlib.sha256(email.encode('utf-8')).hexdigest()

    @_translate_store_errors
    def create_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        transaction = self.db.transaction()
        email_ref = self.user_emails_ref.document(self._email_key(user_data['email']))
        user_ref = self.users_ref.document(user_data['user_id'])

        @firestore.transactional
        def _create_in_transaction(transaction, email_ref, user_ref):
            """
            이메일 예약 문서와 사용자 문서를 한 트랜잭션에서 만듭니다.
            같은 이메일로 동시에 가입하면 한쪽만 성공하고 나머지는 재시도 중 중복으로 판정됩니다.
            """
            if email_ref.get(transaction=transaction, timeout=self.timeout).exists:
                raise DuplicateIdentityError()
            transaction.create(email_ref, {'user_id': user_data['user_id']})
            transaction.create(user_ref, DateTimeUtils.for_firestore(user_data))

        _create_in_transaction(transaction, email_ref, user_ref)
        return user_data

    @_translate_store_errors
    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        user_ref = self.users_ref.document(user_id)
        if not user_ref.get(timeout=self.timeout).exists:
            return None
        user_ref.update(DateTimeUtils.for_firestore(fields), timeout=self.timeout)
        return self._to_dict(user_ref.get(timeout=self.timeout))

    # --- posts ---
    @_translate_store_errors
    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        doc = self.posts_ref.document(post_id).get(timeout=self.timeout)
        return self._to_dict(doc) if doc.exists else None

    @_translate_store_errors
    def list_posts(self, category: Optional[str] = None, location: Optional[str] = None,
                   user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        query = self.posts_ref
        if category is not None:
            query = query.where('category', '==', category)
        if location is not None:
            query = query.where('location', '==', location)
        if user_id is not None:
            query = query.where('user_id', '==', user_id)
        query = query.order_by('created_at', direction=firestore.Query.DESCENDING)
        return [self._to_dict(doc) for doc in query.stream(timeout=self.timeout)]

    @_translate_store_errors
    def count_posts_by_user(self, user_id: str) -> int:
        # count()는 문서를 모두 가져오지 않고 숫자만 집계합니다.
        count_result = self.posts_ref.where('user_id', '==', user_id).count().get(timeout=self.timeout)
        return count_result[0][0].value

    @_translate_store_errors
    def create_post(self, post_data: Dict[str, Any]) -> Dict[str, Any]:
        self.posts_ref.document(post_data['post_id']).set(DateTimeUtils.for_firestore(post_data), timeout=self.timeout)
        return post_data

    @_translate_store_errors
    def update_post(self, post_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        post_ref = self.posts_ref.document(post_id)
        if not post_ref.get(timeout=self.timeout).exists:
            return None
        post_ref.update(DateTimeUtils.for_firestore(fields), timeout=self.timeout)
        return self._to_dict(post_ref.get(timeout=self.timeout))

    @_translate_store_errors
    def delete_post(self, post_id: str) -> bool:
        post_ref = self.posts_ref.document(post_id)
        if not post_ref.get(timeout=self.timeout).exists:
            return False
        post_ref.delete(timeout=self.timeout)
        return True

    @_translate_store_errors
    def toggle_thank(self, post_id: str, user_id: str) -> Tuple[Dict[str, Any], bool]:
        transaction = self.db.transaction()
        post_ref = self.posts_ref.document(post_id)

        @firestore.transactional
        def _toggle_in_transaction(transaction, post_ref, user_id):
            """
            트랜잭션 내에서 감사 표시를 토글합니다.
            동시에 들어온 요청이 같은 문서를 바꾸면 Firestore 가 트랜잭션을 재시도하므로
            thank_count == len(thanked_by) 가 항상 유지됩니다.
            """
            post_doc = post_ref.get(transaction=transaction, timeout=self.timeout)
            if not post_doc.exists:
                raise NotFoundError("Post not found")

            post_data = self._to_dict(post_doc)
            thanked_by = list(post_data.get('thanked_by', []))
            if user_id in thanked_by:
                thanked_by.remove(user_id)
                is_thanked = False
            else:
                thanked_by.append(user_id)
                is_thanked = True

            updates = {'thanked_by': thanked_by, 'thank_count': len(thanked_by)}
            transaction.update(post_ref, updates)
            post_data.update(updates)
            return post_data, is_thanked

        return _toggle_in_transaction(transaction, post_ref, user_id)

    @_translate_store_errors
    def list_locations(self) -> List[str]:
        docs = self.posts_ref.select(['location']).stream(timeout=self.timeout)
        return list({doc.to_dict().get('location') for doc in docs if doc.to_dict().get('location')})

    # --- categories ---
    @_translate_store_errors
    def list_categories(self) -> List[Dict[str, Any]]:
        query = self.categories_ref.order_by('sort_order')
        return [self._to_dict(doc) for doc in query.stream(timeout=self.timeout)]

    @_translate_store_errors
    def add_categories(self, categories: List[Dict[str, Any]]) -> None:
        batch = self.db.batch()
        for category in categories:
            batch.set(self.categories_ref.document(category['category_id']), category)
        batch.commit(timeout=self.timeout)
