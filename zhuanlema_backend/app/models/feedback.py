# app/models/feedback.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.utils.datetime_utils import DateTimeUtils

@dataclass
class Feedback:
    """'feedback' 컬렉션 문서. 비로그인 사용자도 제출할 수 있습니다."""
    feedback_id: str
    content: str
    contact: str = ""
    user_id: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
