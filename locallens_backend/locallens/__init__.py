# locallens/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

# - 설정
from locallens.core.config import config_by_name
from locallens.core.exceptions import LocalLensError, UnauthenticatedError, InvalidTokenError
from locallens.core.responses import error_response, validation_error_response

# - 저장소
from locallens.store import DocumentStore, create_store

# - API 블루프린트
from locallens.api.auth.routes import auth_bp
from locallens.api.posts.routes import posts_bp
from locallens.api.categories.routes import categories_bp
from locallens.api.users.routes import users_bp

# - 서비스 모듈
from locallens.api.auth.services import AuthService
from locallens.api.posts.services import PostService
from locallens.api.categories.services import CategoryService
from locallens.api.users.services import UserService


def create_app(config_name: Optional[str] = None, store: Optional[DocumentStore] = None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development', 'testing', 'production' 중 하나. 없으면 FLASK_ENV 를 따릅니다.
    :param store: 미리 만들어 둔 저장소를 주입할 때 사용합니다. 없으면 STORE_BACKEND 설정으로 생성합니다.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    if config_name not in config_by_name:
        raise ValueError(f"알 수 없는 설정 이름입니다: {config_name}")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # 필수 환경 변수 검증
    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("필수 환경 변수가 설정되지 않았습니다: JWT_SECRET_KEY")

    # =====================================================================================
    # 4. 확장 기능 및 저장소 초기화
    # =====================================================================================
    CORS(app, origins=app.config['ALLOWED_ORIGINS'])
    jwt = JWTManager(app)

    # 저장소에 접속할 수 없으면 서버를 시작하지 않습니다.
    if store is None:
        try:
            store = create_store(app)
        except Exception as e:
            logging.error(f"Failed to initialize store: {e}")
            raise
    app.store = store

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {
        'auth': AuthService(store),
        'posts': PostService(store, default_avatar_url=app.config['DEFAULT_AVATAR_URL']),
        'categories': CategoryService(store, default_locations=app.config['DEFAULT_LOCATIONS']),
        'users': UserService(store),
    }

    # =====================================================================================
    # 6. JWT 콜백: 토큰 문제는 모두 401 로 응답합니다.
    # =====================================================================================
    @jwt.unauthorized_loader
    def handle_missing_token(reason):
        return error_response(UnauthenticatedError())

    @jwt.invalid_token_loader
    def handle_invalid_token(reason):
        return error_response(InvalidTokenError())

    @jwt.expired_token_loader
    def handle_expired_token(jwt_header, jwt_payload):
        return error_response(InvalidTokenError("Token has expired"))

    @jwt.user_lookup_loader
    def load_user(jwt_header, jwt_data):
        return app.services['auth'].get_user(jwt_data['sub'])

    @jwt.user_lookup_error_loader
    def handle_unknown_user(jwt_header, jwt_data):
        return error_response(InvalidTokenError())

    # =====================================================================================
    # 7. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(categories_bp, url_prefix='/api')

    # =====================================================================================
    # 8. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        return validation_error_response(err)

    @app.errorhandler(LocalLensError)
    def handle_domain_error(err):
        if err.status_code >= 500:
            logging.error(f"요청 처리 중 저장소/서버 오류 발생: {err.error_code}", exc_info=True)
        return error_response(err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return jsonify({"error_code": err.name.upper().replace(' ', '_'), "msg": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리. 내부 정보는 응답에 담지 않습니다.
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "msg": "Server error"}), 500

    logging.info(f"Flask app created for '{config_name}' environment (store: {type(store).__name__}).")

    return app
