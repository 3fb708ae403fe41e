# app/models/check_in.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from app.utils.datetime_utils import DateTimeUtils

class CheckInResult(Enum):
    """오늘 수익을 냈는지 여부"""
    YES = "yes"
    NO = "no"

@dataclass
class CheckIn:
    """
    'check_ins' 컬렉션 문서. 문서 ID는 f"{user_id}_{YYYYMMDD}" 형식으로 하루 한 건만 유지합니다.
    """
    check_in_id: str
    user_id: str
    result: str       # CheckInResult 값
    date: str         # YYYY-MM-DD
    created_at: datetime = field(default_factory=DateTimeUtils.now)
