# app/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.utils.datetime_utils import DateTimeUtils

@dataclass
class Comment:
    """
    Firestore 'comments' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    """
    comment_id: str
    post_id: str
    user_id: str
    nickname: str
    content: str
    like_count: int = 0
    # 답글인 경우에만 채워집니다.
    parent_id: Optional[str] = None
    reply_to_comment_id: Optional[str] = None
    reply_to_nickname: Optional[str] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
