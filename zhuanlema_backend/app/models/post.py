# app/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from app.utils.datetime_utils import DateTimeUtils

@dataclass
class Post:
    """
    Firestore 'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    삭제는 소프트 삭제만 허용합니다 (is_deleted=True, 내용/이미지/태그 비움).
    """
    post_id: str
    user_id: str          # 작성자
    nickname: str
    content: str
    images: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    like_count: int = 0
    comment_count: int = 0
    hot_score: float = 0.0
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
