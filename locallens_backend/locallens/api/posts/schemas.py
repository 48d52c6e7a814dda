# locallens/api/posts/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from locallens.api.posts.services import SORT_OPTIONS


# --- 재사용을 위한 중첩 스키마 ---
class AuthorSchema(Schema):
    """게시물 응답에 포함될 작성자 정보 스키마."""
    username = fields.Str(required=True)
    avatar = fields.Str(required=True)


# --- API 요청/응답 스키마 ---

class PostCreateSchema(Schema):
    """POST /api/posts 요청 본문의 유효성을 검사합니다. 작성자는 토큰에서 가져오므로 userId 등은 무시합니다."""
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=5, max=100))
    content = fields.Str(required=True, validate=validate.Length(min=20, max=2000))
    category = fields.Str(required=True, validate=validate.Length(min=1))
    location = fields.Str(required=True, validate=validate.Length(min=1))


class PostUpdateSchema(PostCreateSchema):
    """PUT /api/posts/{post_id} 요청 본문. partial=True 로 load 합니다."""
    pass


class PostListQuerySchema(Schema):
    """GET /api/posts 쿼리 파라미터."""
    class Meta:
        unknown = EXCLUDE

    category = fields.Str(load_default=None)
    location = fields.Str(load_default=None)
    user_id = fields.Str(data_key="userId", load_default=None)
    sort = fields.Str(load_default="recent", validate=validate.OneOf(SORT_OPTIONS))


class PostViewSchema(Schema):
    """게시글 응답(PostView)의 최종 JSON 형식을 정의합니다."""
    post_id = fields.Str(data_key="id")
    title = fields.Str(required=True)
    content = fields.Str(required=True)
    category = fields.Str(required=True)
    location = fields.Str(required=True)
    created_at = fields.DateTime(data_key="date")
    user_id = fields.Str(data_key="userId")
    author = fields.Nested(AuthorSchema, required=True)
    thank_count = fields.Int(data_key="thankCount")
    comment_count = fields.Int(data_key="comments")
    thanked_by_user = fields.Bool(data_key="thankedByUser", dump_default=False)
