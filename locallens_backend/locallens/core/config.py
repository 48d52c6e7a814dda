# locallens/core/config.py

import os
from datetime import timedelta


def _split_env_list(value: str) -> list:
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # JWT 서명에 사용하는 비밀키. 테스트 환경을 제외하면 반드시 .env 에 있어야 합니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    # 세션 토큰은 24시간 동안 유효합니다.
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    # 프론트엔드는 'x-auth-token: <token>' 형태로 토큰을 보냅니다. (Bearer 접두사 없음)
    JWT_TOKEN_LOCATION = ['headers']
    JWT_HEADER_NAME = 'x-auth-token'
    JWT_HEADER_TYPE = ''

    # 'firestore' 또는 'memory'
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'firestore')
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')
    STORE_TIMEOUT_SECONDS = float(os.getenv('STORE_TIMEOUT_SECONDS', '10'))

    DEFAULT_AVATAR_URL = os.getenv('DEFAULT_AVATAR_URL', '/placeholder.svg')
    DEFAULT_LOCATIONS = _split_env_list(os.getenv('DEFAULT_LOCATIONS', 'Erode,Coimbatore,Tiruppur,Salem'))

    # CORS: 기본값은 Vite 개발 서버
    ALLOWED_ORIGINS = _split_env_list(os.getenv('ALLOWED_ORIGINS', 'http://localhost:8080,http://localhost:5173'))


class DevelopmentConfig(Config):
    """개발 환경 설정. 코드 변경 시 자동 재시작되고 상세한 디버그 정보가 표시됩니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH', Config.FIREBASE_CREDENTIALS_PATH)


class TestingConfig(Config):
    """테스트 환경 설정. 외부 DB 없이 인메모리 저장소를 사용합니다."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = 'locallens-test-secret-key-0123456789'
    STORE_BACKEND = 'memory'


class ProductionConfig(Config):
    DEBUG = False


# FLASK_ENV 값에 따라 create_app 에서 적절한 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
