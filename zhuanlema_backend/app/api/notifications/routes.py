# app/api/notifications/routes.py
from flask import Blueprint, current_app

from app.api.notifications.schemas import NotificationResponseSchema
from app.api.request_utils import current_user_id, page_limit, page_offset
from app.core.responses import success_response
from app.utils.validators import require_document_id, require_user_id

notifications_bp = Blueprint('notifications_bp', __name__)

@notifications_bp.route('', methods=['GET'])
def get_notifications():
    """로그인한 사용자의 알림 목록을 최신순으로 조회합니다."""
    notification_service = current_app.services['notifications']
    user_id = require_user_id(current_user_id())
    notifications, unread_count = notification_service.get_notifications(user_id, page_limit(), page_offset())
    return success_response({
        "notifications": NotificationResponseSchema(many=True).dump(notifications),
        "unread_count": unread_count
    })

@notifications_bp.route('/<string:notification_id>/read', methods=['POST'])
def mark_notification_read(notification_id: str):
    """알림을 읽음 처리합니다. (본인 알림만 가능)"""
    notification_service = current_app.services['notifications']
    notification_id = require_document_id(notification_id, "notificationId")
    user_id = require_user_id(current_user_id())
    result = notification_service.mark_read(notification_id, user_id)
    return success_response(result, message="已标记为已读")
