# app/models/notification.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from app.utils.datetime_utils import DateTimeUtils

class NotificationType(Enum):
    """알림 유형을 정의하는 Enum 클래스"""
    POST_LIKE = "POST_LIKE"
    COMMENT = "COMMENT"
    COMMENT_LIKE = "COMMENT_LIKE"
    SYSTEM = "SYSTEM"

@dataclass
class Notification:
    """
    Firestore 'notifications' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    """
    notification_id: str
    user_id: str           # 알림을 받는 사용자 ID
    sender_id: str         # 알림을 유발한 사용자 ID ('system' 가능)
    type: NotificationType
    target_id: str         # 알림 대상 객체 ID (post_id, comment_id)
    title: str
    body: str = ""
    read: bool = False
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: Optional[datetime] = None
