# app/api/notifications/schemas.py
from marshmallow import Schema, fields

class NotificationResponseSchema(Schema):
    """알림 목록 응답 항목."""
    notification_id = fields.Str(required=True)
    user_id = fields.Str(required=True)
    sender_id = fields.Str()
    type = fields.Str()
    target_id = fields.Str()
    title = fields.Str(dump_default="")
    body = fields.Str(dump_default="")
    read = fields.Bool(dump_default=False)
    created_at = fields.DateTime()
