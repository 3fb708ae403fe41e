# app/api/posts/schemas.py
from marshmallow import Schema, fields, validate, pre_load

def strip_strings(data, names):
    """문자열 필드의 앞뒤 공백을 제거한 복사본을 반환합니다."""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for name in names:
        if isinstance(data.get(name), str):
            data[name] = data[name].strip()
    return data

# --- API 요청/응답 스키마 ---

class PostCreateSchema(Schema):
    """POST /api/posts 요청 본문의 유효성을 검사합니다."""
    content = fields.Str(required=True, validate=validate.Length(min=1, max=2000, error="内容不能为空"))
    images = fields.List(fields.Str(validate=validate.Length(min=1)), load_default=list, validate=validate.Length(max=9))
    tags = fields.List(fields.Str(validate=validate.Length(min=1, max=20)), load_default=list, validate=validate.Length(max=5))
    # 구버전 클라이언트가 본문에 함께 보내는 토큰
    access_token = fields.Str(load_only=True)

    @pre_load
    def strip_content(self, data, **kwargs):
        return strip_strings(data, ['content'])

class PostResponseSchema(Schema):
    """게시글 정보 응답을 위한 최종 JSON 형식을 정의합니다."""
    post_id = fields.Str(required=True)
    user_id = fields.Str(required=True)
    nickname = fields.Str()
    content = fields.Str(required=True)
    images = fields.List(fields.Str())
    tags = fields.List(fields.Str())
    like_count = fields.Int()
    comment_count = fields.Int()
    hot_score = fields.Float()
    is_deleted = fields.Bool()
    deleted_at = fields.DateTime(allow_none=True)
    created_at = fields.DateTime()

class LikeStateSchema(Schema):
    """좋아요/좋아요 취소 응답."""
    post_id = fields.Str()
    comment_id = fields.Str()
    like_count = fields.Int(required=True)
    is_liked = fields.Bool(required=True)
