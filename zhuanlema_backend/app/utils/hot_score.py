# app/utils/hot_score.py
from datetime import datetime
from typing import Any, Optional

from app.utils.datetime_utils import DateTimeUtils

def calc_hot_score(like_count: int, comment_count: int, created_at: Any, now: Optional[datetime] = None) -> float:
    """
    게시글 인기 점수(시간 감쇠 포함)
    (좋아요 + 댓글 * 2) / (경과 시간 + 2) ^ 1.5
    """
    age_hours = DateTimeUtils.hours_since(created_at, now=now)
    return (max(0, like_count) + max(0, comment_count) * 2) / (age_hours + 2) ** 1.5
