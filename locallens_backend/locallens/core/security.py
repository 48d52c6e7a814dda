# locallens/core/security.py

from typing import Optional

import jwt
from flask_jwt_extended import create_access_token, decode_token, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from passlib.context import CryptContext

from locallens.core.exceptions import InvalidTokenError

# argon2 는 해시마다 임의의 salt 를 만들고, 비교는 상수 시간으로 수행합니다.
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


# --- 비밀번호 해싱 ---
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """존재하지 않는 이메일로 로그인할 때도 해시 검증 비용을 똑같이 치르게 합니다."""
    pwd_context.dummy_verify()


# --- 세션 토큰 ---
def issue_session_token(user_id: str) -> str:
    """user_id 를 subject 로 하는 서명된 세션 토큰을 발급합니다. 만료 시간은 JWT_ACCESS_TOKEN_EXPIRES 설정을 따릅니다."""
    return create_access_token(identity=user_id)


def decode_session_token(token: str) -> dict:
    """
    토큰의 서명과 만료 시간을 검증하고 claim 딕셔너리를 반환합니다.
    부수효과가 없으며, 앱 컨텍스트 안에서 호출되어야 합니다.

    :raises InvalidTokenError: 서명 불일치, 형식 오류, 만료된 토큰
    """
    if not token:
        raise InvalidTokenError()
    try:
        return decode_token(token)
    except (jwt.PyJWTError, JWTExtendedException) as e:
        raise InvalidTokenError() from e


def get_optional_user_id() -> Optional[str]:
    """
    인증이 선택적인 엔드포인트에서 요청자의 user_id 를 구합니다.
    토큰이 없거나 유효하지 않으면(만료, 서명 불일치, 탈퇴한 사용자) 익명 사용자로 간주해 None 을 반환합니다.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (jwt.PyJWTError, JWTExtendedException):
        return None
    return get_jwt_identity()
