# app/api/feedback/schemas.py
from marshmallow import Schema, fields, validate, pre_load

from app.api.posts.schemas import strip_strings

class FeedbackCreateSchema(Schema):
    """POST /api/feedback 요청 본문."""
    content = fields.Str(required=True, validate=validate.Length(min=1, max=2000, error="反馈内容不能为空"))
    contact = fields.Str(load_default="", validate=validate.Length(max=100))
    access_token = fields.Str(load_only=True)

    @pre_load
    def strip_fields(self, data, **kwargs):
        data = strip_strings(data, ['content', 'contact'])
        # contact: null 은 생략과 같게 취급
        if isinstance(data, dict) and 'contact' in data and data['contact'] is None:
            data.pop('contact')
        return data
