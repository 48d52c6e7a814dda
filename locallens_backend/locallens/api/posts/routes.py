# locallens/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError

from locallens.api.posts.schemas import PostCreateSchema, PostUpdateSchema, PostListQuerySchema, PostViewSchema
from locallens.core.exceptions import ForbiddenError, NotFoundError
from locallens.core.responses import error_response, validation_error_response
from locallens.core.security import get_optional_user_id

posts_bp = Blueprint('posts_bp', __name__)


@posts_bp.route('', methods=['GET'])
def get_posts():
    """
    게시글 목록을 조회합니다. (category, location, userId 필터와 sort=recent|popular)
    로그인한 사용자가 조회하면 각 게시글의 thankedByUser 가 본인 기준으로 채워집니다.
    """
    post_service = current_app.services['posts']
    try:
        query = PostListQuerySchema().load(request.args)
    except ValidationError as err:
        return validation_error_response(err)

    posts = post_service.list_posts(
        category=query['category'],
        location=query['location'],
        user_id=query['user_id'],
        sort=query['sort'],
        current_user_id=get_optional_user_id()
    )
    return jsonify(PostViewSchema(many=True).dump(posts)), 200


@posts_bp.route('', methods=['POST'])
@jwt_required()
def create_post():
    """새 게시글을 작성합니다. 작성자는 토큰의 사용자입니다."""
    user_id = get_jwt_identity()
    post_service = current_app.services['posts']
    try:
        data = PostCreateSchema().load(request.get_json(silent=True) or {})
        new_post = post_service.create_post(user_id, data['title'], data['content'], data['category'], data['location'])
        return jsonify(PostViewSchema().dump(new_post)), 201
    except ValidationError as err:
        return validation_error_response(err)
    except NotFoundError as e:
        return error_response(e)


@posts_bp.route('/<string:post_id>', methods=['GET'])
def get_post(post_id: str):
    post_service = current_app.services['posts']
    post = post_service.get_post(post_id, current_user_id=get_optional_user_id())
    if post is None:
        return error_response(NotFoundError("Post not found"))
    return jsonify(PostViewSchema().dump(post)), 200


@posts_bp.route('/<string:post_id>', methods=['PUT'])
@jwt_required()
def update_post(post_id: str):
    """[작성자 전용] 게시글을 수정합니다 (부분 업데이트)."""
    user_id = get_jwt_identity()
    post_service = current_app.services['posts']
    try:
        update_data = PostUpdateSchema(partial=True).load(request.get_json(silent=True) or {})
        updated_post = post_service.update_post(post_id, user_id, update_data)
        return jsonify(PostViewSchema().dump(updated_post)), 200
    except ValidationError as err:
        return validation_error_response(err)
    except (ForbiddenError, NotFoundError) as e:
        return error_response(e)


@posts_bp.route('/<string:post_id>', methods=['DELETE'])
@jwt_required()
def delete_post(post_id: str):
    """[작성자 전용] 게시글을 삭제합니다."""
    user_id = get_jwt_identity()
    post_service = current_app.services['posts']
    try:
        post_service.delete_post(post_id, user_id)
        return jsonify({"msg": "Post removed"}), 200
    except (ForbiddenError, NotFoundError) as e:
        return error_response(e)


@posts_bp.route('/<string:post_id>/thank', methods=['PUT'])
@jwt_required()
def toggle_thank(post_id: str):
    """게시글 감사 표시를 누르거나 취소합니다."""
    user_id = get_jwt_identity()
    post_service = current_app.services['posts']
    try:
        updated_post = post_service.toggle_thank(post_id, user_id)
        return jsonify(PostViewSchema().dump(updated_post)), 200
    except NotFoundError as e:
        logging.warning(f"존재하지 않는 게시글에 대한 감사 토글 요청 (post_id: {post_id}, user_id: {user_id})")
        return error_response(e)
