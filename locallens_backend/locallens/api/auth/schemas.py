# locallens/api/auth/schemas.py
from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    """POST /api/auth/register 요청 본문의 유효성을 검사하는 스키마"""
    username = fields.Str(required=True, validate=validate.Length(min=3, max=30))
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6))


class LoginSchema(Schema):
    """POST /api/auth/login 요청 본문의 유효성을 검사하는 스키마"""
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)


class UserResponseSchema(Schema):
    """
    로그인한 사용자 본인에게 돌려주는 사용자 정보.
    password_hash 는 정의하지 않았으므로 절대 직렬화되지 않습니다.
    """
    user_id = fields.Str(data_key="id")
    username = fields.Str()
    email = fields.Email()
    created_at = fields.DateTime(data_key="createdAt")
    avatar = fields.Str(allow_none=True)
    bio = fields.Str(allow_none=True)
    location = fields.Str(allow_none=True)
    badges = fields.List(fields.Str(), dump_default=list)
