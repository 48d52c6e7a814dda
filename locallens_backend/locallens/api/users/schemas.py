# locallens/api/users/schemas.py
from marshmallow import Schema, fields, validate


class UserPublicResponseSchema(Schema):
    """
    GET /api/users/{user_id}
    다른 사용자의 프로필을 응답할 때 사용하는 스키마.
    민감한 정보(email, password_hash)는 제외하고 공개 가능한 정보만 포함합니다.
    """
    user_id = fields.Str(data_key="id", dump_only=True)
    username = fields.Str(required=True)
    avatar = fields.Str(allow_none=True)
    bio = fields.Str(allow_none=True)
    location = fields.Str(allow_none=True)
    badges = fields.List(fields.Str(), dump_default=list)
    created_at = fields.DateTime(data_key="createdAt")
    post_count = fields.Int(data_key="postCount")


class ProfileUpdateSchema(Schema):
    """PATCH /api/users/me 요청 본문의 유효성을 검사하는 스키마."""
    avatar = fields.URL(allow_none=True)
    bio = fields.Str(allow_none=True, validate=validate.Length(max=500))
    location = fields.Str(allow_none=True, validate=validate.Length(max=100))
