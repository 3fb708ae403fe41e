# app/api/comments/schemas.py
from marshmallow import Schema, fields, validate, pre_load

from app.api.posts.schemas import strip_strings

class CommentCreateSchema(Schema):
    """
    POST /api/posts/{post_id}/comments
    댓글 생성을 요청할 때의 데이터 형식을 정의하고 유효성을 검사합니다.
    """
    content = fields.Str(required=True, validate=validate.Length(min=1, max=1000, error="评论内容不能为空"))
    parent_id = fields.Str(load_default=None, allow_none=True)
    access_token = fields.Str(load_only=True)

    @pre_load
    def strip_fields(self, data, **kwargs):
        data = strip_strings(data, ['content', 'parent_id'])
        if isinstance(data, dict) and data.get('parent_id') == "":
            data['parent_id'] = None
        return data

class CommentResponseSchema(Schema):
    """
    댓글 정보 응답을 위한 최종 JSON 형식을 정의합니다.
    """
    comment_id = fields.Str(required=True)
    post_id = fields.Str(required=True)
    user_id = fields.Str(required=True)
    nickname = fields.Str()
    content = fields.Str(required=True)
    like_count = fields.Int()
    parent_id = fields.Str(allow_none=True)
    reply_to_comment_id = fields.Str(allow_none=True)
    reply_to_nickname = fields.Str(allow_none=True)
    is_deleted = fields.Bool()
    deleted_at = fields.DateTime(allow_none=True)
    created_at = fields.DateTime()
