# locallens/api/auth/services.py
import uuid
import logging
from dataclasses import asdict
from typing import Dict, Any, Tuple, Optional

from locallens.core import security
from locallens.core.exceptions import DuplicateIdentityError, InvalidCredentialsError, InvalidTokenError
from locallens.models.user import User
from locallens.store.base import DocumentStore


class AuthService:
    """
    회원가입, 로그인, 세션 토큰 검증을 담당하는 서비스 클래스.
    반환하는 사용자 딕셔너리에는 password_hash 가 포함되지 않습니다.
    """
    def __init__(self, store: DocumentStore):
        self.store = store

    @staticmethod
    def _public(user_data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in user_data.items() if k != 'password_hash'}

    @staticmethod
    def _normalize_email(email: str) -> str:
        return email.strip().lower()

    def register(self, username: str, email: str, password: str) -> Tuple[str, Dict[str, Any]]:
        """새 사용자를 만들고 (세션 토큰, 공개 사용자 정보)를 반환합니다."""
        email = self._normalize_email(email)
        # 이메일 중복을 먼저 확인합니다. 다른 필드와 관계없이 항상 같은 오류입니다.
        if self.store.find_user_by_email(email):
            raise DuplicateIdentityError("User already exists")
        if self.store.find_user_by_username(username):
            raise DuplicateIdentityError("Username is already taken")

        new_user = User(
            user_id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=security.hash_password(password)
        )
        self.store.create_user(asdict(new_user))
        logging.info(f"신규 사용자 가입 완료 (user_id: {new_user.user_id})")

        token = security.issue_session_token(new_user.user_id)
        return token, self._public(asdict(new_user))

    def login(self, email: str, password: str) -> Tuple[str, Dict[str, Any]]:
        """
        이메일/비밀번호를 검증하고 (세션 토큰, 공개 사용자 정보)를 반환합니다.
        존재하지 않는 이메일과 틀린 비밀번호는 같은 오류로 응답하며,
        이메일이 없을 때도 더미 해시 검증을 수행해 응답 시간 차이를 줄입니다.
        """
        user_data = self.store.find_user_by_email(self._normalize_email(email))
        if user_data is None:
            security.dummy_verify()
            raise InvalidCredentialsError()
        if not security.verify_password(password, user_data['password_hash']):
            raise InvalidCredentialsError()

        token = security.issue_session_token(user_data['user_id'])
        return token, self._public(user_data)

    def verify_session(self, token: str) -> Dict[str, Any]:
        """토큰의 서명/만료를 확인하고 해당 사용자를 반환합니다."""
        claims = security.decode_session_token(token)
        user_data = self.store.get_user(claims.get('sub'))
        if user_data is None:
            raise InvalidTokenError()
        return self._public(user_data)

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        user_data = self.store.get_user(user_id)
        return self._public(user_data) if user_data else None
