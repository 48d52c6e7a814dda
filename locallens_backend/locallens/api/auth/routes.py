# locallens/api/auth/routes.py

from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from locallens.api.auth.schemas import RegisterSchema, LoginSchema, UserResponseSchema
from locallens.core.exceptions import DuplicateIdentityError, InvalidCredentialsError, InvalidTokenError, UnauthenticatedError
from locallens.core.responses import error_response, validation_error_response

auth_bp = Blueprint('auth_bp', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """회원가입 후 바로 로그인된 상태가 되도록 세션 토큰을 함께 반환합니다."""
    auth_service = current_app.services['auth']
    try:
        data = RegisterSchema().load(request.get_json(silent=True) or {})
        token, user = auth_service.register(data['username'], data['email'], data['password'])
        return jsonify({"token": token, "user": UserResponseSchema().dump(user)}), 201
    except ValidationError as err:
        return validation_error_response(err)
    except DuplicateIdentityError as e:
        return error_response(e)


@auth_bp.route('/login', methods=['POST'])
def login():
    """이메일/비밀번호 로그인. 실패 사유와 관계없이 동일한 응답을 돌려줍니다."""
    auth_service = current_app.services['auth']
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
        token, user = auth_service.login(data['email'], data['password'])
        return jsonify({"token": token, "user": UserResponseSchema().dump(user)}), 200
    except ValidationError as err:
        return validation_error_response(err)
    except InvalidCredentialsError as e:
        return error_response(e)


@auth_bp.route('/user', methods=['GET'])
def get_authenticated_user():
    """x-auth-token 헤더의 세션 토큰을 검증하고 해당 사용자 정보를 반환합니다."""
    auth_service = current_app.services['auth']
    token = request.headers.get(current_app.config['JWT_HEADER_NAME'])
    try:
        if not token:
            raise UnauthenticatedError()
        user = auth_service.verify_session(token)
        return jsonify(UserResponseSchema().dump(user)), 200
    except (UnauthenticatedError, InvalidTokenError) as e:
        return error_response(e)
