# app/services/notification_service.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, List, Tuple

from app.core.errors import NotFound, PermissionDenied
from app.models.notification import Notification, NotificationType
from app.services.document_store import DocumentStore
from app.services.user_service import UserService
from app.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

NOTIFICATIONS = 'notifications'

_TITLES = {
    NotificationType.POST_LIKE: "{nickname} 赞了你的帖子",
    NotificationType.COMMENT: "{nickname} 评论了你的帖子",
    NotificationType.COMMENT_LIKE: "{nickname} 赞了你的评论",
}

class NotificationService:
    """
    알림 관련 비즈니스 로직을 담당하는 공용 서비스 클래스.
    - 좋아요/댓글 서비스가 알림 생성을 위해 주입받습니다.
    - 알림 목록 조회와 읽음 처리도 담당합니다.
    """
    def __init__(self, store: DocumentStore, user_service: UserService):
        self.store = store
        self.user_service = user_service

    def create_notification(self, recipient_id: str, sender_id: str, n_type: NotificationType,
                            target_id: str, body: str = "", title: Optional[str] = None) -> Optional[str]:
        """
        알림을 생성하여 저장합니다.
        - 자기 자신에게 보내는 알림은 생성하지 않습니다.
        - 알림 생성 실패는 원래 작업을 실패시키지 않습니다 (로그만 남김).

        :return: 생성된 notification_id 또는 None
        """
        if not recipient_id or recipient_id == sender_id:
            return None

        try:
            if title is None:
                nickname = self.user_service.get_nickname(sender_id)
                title = _TITLES.get(n_type, "系统通知").format(nickname=nickname)

            notification = Notification(
                notification_id=str(uuid.uuid4()),
                user_id=recipient_id,
                sender_id=sender_id,
                type=n_type,
                target_id=target_id,
                title=title,
                body=body
            )

            # Enum 멤버를 문자열 값으로 변환하여 저장
            notification_dict = asdict(notification)
            notification_dict['type'] = notification.type.value

            self.store.add(NOTIFICATIONS, notification_dict, doc_id=notification.notification_id)
            logger.info(f"{n_type.value} 알림 생성 완료: {sender_id} -> {recipient_id}")
            return notification.notification_id
        except Exception as e:
            logger.error(f"알림 생성 중 오류 발생: {e}", exc_info=True)
            return None

    def get_notifications(self, user_id: str, limit: int, offset: int) -> Tuple[List[Dict[str, Any]], int]:
        """사용자의 알림을 최신순으로 조회하고, 읽지 않은 알림 수를 함께 반환합니다."""
        notifications = self.store.query(
            NOTIFICATIONS,
            [('user_id', '==', user_id)],
            order_by='created_at', descending=True,
            limit=limit, offset=offset
        )
        unread_count = self.store.count(NOTIFICATIONS, [('user_id', '==', user_id), ('read', '==', False)])
        return notifications, unread_count

    def mark_read(self, notification_id: str, user_id: str) -> Dict[str, Any]:
        """알림을 읽음 처리합니다. 본인 알림만 가능하며, 이미 읽은 알림이면 쓰기 없이 반환합니다."""
        notification = self.store.get(NOTIFICATIONS, notification_id)
        if not notification:
            raise NotFound("通知不存在")
        if notification.get('user_id') != user_id:
            raise PermissionDenied("无权操作该通知")

        if not notification.get('read'):
            self.store.update(NOTIFICATIONS, notification_id, {'read': True, 'updated_at': DateTimeUtils.now()})
        return {"notification_id": notification_id, "read": True}
