# app/models/like.py
from dataclasses import dataclass, field
from datetime import datetime

from app.utils.datetime_utils import DateTimeUtils

@dataclass
class PostLike:
    """'post_likes' 문서. 존재 자체가 '이 사용자가 이 게시글을 좋아함'을 뜻합니다."""
    like_id: str
    post_id: str
    user_id: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)

@dataclass
class CommentLike:
    """'comment_likes' 문서. 게시글 삭제 시 일괄 정리를 위해 post_id도 함께 저장합니다."""
    like_id: str
    comment_id: str
    post_id: str
    user_id: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)
