# app/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간/날짜 처리를 위한 유틸리티 모듈

- 백엔드는 모든 시각을 UTC timezone-aware datetime으로 다룹니다.
- 구버전 클라이언트가 저장한 epoch 밀리초 값과 ISO 문자열도 datetime으로 정규화합니다.
- 체크인 날짜는 'YYYY-MM-DD' 문자열로 저장합니다.
"""

import calendar
import logging
from datetime import datetime, date, timezone
from typing import Any, Optional, Tuple
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'

class DateTimeUtils:
    """시간/날짜 처리를 위한 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def today() -> date:
        """오늘 날짜(UTC)를 반환"""
        return datetime.now(timezone.utc).date()

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 UTC datetime으로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00
        """
        if not iso_string:
            raise ValueError("빈 문자열은 파싱할 수 없습니다")
        try:
            dt = dateutil_parser.isoparse(iso_string)
        except (ValueError, OverflowError) as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")

        # timezone-naive인 경우 UTC로 가정
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def coerce_datetime(value: Any) -> Optional[datetime]:
        """
        저장소에서 읽은 시각 값을 UTC datetime으로 변환합니다.
        - datetime (Firestore Timestamp 포함) -> UTC
        - int/float -> epoch 밀리초로 해석
        - str -> ISO 파싱
        변환할 수 없으면 None을 반환합니다.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        if isinstance(value, str):
            try:
                return DateTimeUtils.parse_iso_datetime(value)
            except ValueError:
                return None
        return None

    @staticmethod
    def hours_since(value: Any, now: Optional[datetime] = None) -> float:
        """주어진 시각으로부터 경과한 시간(시간 단위, 0 이상)"""
        moment = DateTimeUtils.coerce_datetime(value)
        now = now or DateTimeUtils.now()
        if moment is None:
            return 0.0
        return max(0.0, (now - moment).total_seconds() / 3600)

    @staticmethod
    def to_date_string(d: date) -> str:
        """date 객체를 YYYY-MM-DD 형식 문자열로 변환"""
        return d.strftime(DATE_FORMAT)

    @staticmethod
    def month_range(year: int, month: int) -> Tuple[str, str]:
        """해당 월의 첫날과 마지막 날을 YYYY-MM-DD 문자열로 반환"""
        if not 1 <= month <= 12:
            raise ValueError("month는 1-12 사이여야 합니다")
        last_day = calendar.monthrange(year, month)[1]
        return (
            DateTimeUtils.to_date_string(date(year, month, 1)),
            DateTimeUtils.to_date_string(date(year, month, last_day)),
        )
