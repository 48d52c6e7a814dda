# locallens/api/users/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError

from locallens.api.auth.schemas import UserResponseSchema
from locallens.api.users.schemas import UserPublicResponseSchema, ProfileUpdateSchema
from locallens.core.exceptions import NotFoundError
from locallens.core.responses import error_response, validation_error_response

users_bp = Blueprint('users_bp', __name__)


@users_bp.route('/<string:user_id>', methods=['GET'])
def get_user_profile(user_id: str):
    """특정 사용자의 공개 프로필 정보(게시물 수 포함)를 조회합니다."""
    user_service = current_app.services['users']
    user_profile = user_service.get_public_profile(user_id)
    if not user_profile:
        return error_response(NotFoundError("User not found"))
    return jsonify(UserPublicResponseSchema().dump(user_profile)), 200


@users_bp.route('/me', methods=['PATCH'])
@jwt_required()
def update_my_profile():
    """현재 로그인된 사용자의 프로필(avatar, bio, location)을 수정합니다."""
    user_id = get_jwt_identity()
    user_service = current_app.services['users']
    try:
        data = ProfileUpdateSchema().load(request.get_json(silent=True) or {})
        updated_user = user_service.update_profile(user_id, data)
        return jsonify(UserResponseSchema().dump(updated_user)), 200
    except ValidationError as err:
        return validation_error_response(err)
    except NotFoundError as e:
        logging.warning(f"프로필 수정 대상 사용자를 찾을 수 없습니다 (user_id: {user_id})")
        return error_response(e)
