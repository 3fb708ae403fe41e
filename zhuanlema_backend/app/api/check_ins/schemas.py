# app/api/check_ins/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from app.models.check_in import CheckInResult

class CheckInCreateSchema(Schema):
    """POST /api/check-ins 요청 본문. date를 생략하면 오늘(UTC)로 기록합니다."""
    result = fields.Str(required=True, validate=validate.OneOf([r.value for r in CheckInResult]))
    date = fields.Date(format='%Y-%m-%d', load_default=None, allow_none=True)
    access_token = fields.Str(load_only=True)

class CheckInHistoryQuerySchema(Schema):
    """GET /api/check-ins/history 쿼리 파라미터."""
    class Meta:
        unknown = EXCLUDE

    year = fields.Int(required=True, validate=validate.Range(min=2000, max=2100))
    month = fields.Int(required=True, validate=validate.Range(min=1, max=12, error="month 需为 1-12"))

class CheckInResponseSchema(Schema):
    check_in_id = fields.Str(required=True)
    user_id = fields.Str(required=True)
    result = fields.Str(required=True)
    date = fields.Str(required=True)
    created_at = fields.DateTime()
