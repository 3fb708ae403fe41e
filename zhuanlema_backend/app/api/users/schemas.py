# app/api/users/schemas.py
from marshmallow import Schema, fields

class UserStatsResponseSchema(Schema):
    """GET /api/users/<user_id>/stats 응답."""
    user_id = fields.Str(required=True)
    check_in_count = fields.Int(required=True)
    post_count = fields.Int(required=True)
    total_like_count = fields.Int(required=True)
