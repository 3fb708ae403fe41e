# app/api/check_ins/services.py
import logging
from dataclasses import asdict
from datetime import date
from typing import Optional, Dict, Any, List

from app.core.errors import InvalidArgument, Internal
from app.models.check_in import CheckIn, CheckInResult
from app.services.document_store import DocumentStore
from app.utils.datetime_utils import DateTimeUtils
from app.utils.validators import require_user_id

logger = logging.getLogger(__name__)

CHECK_INS = 'check_ins'

class CheckInService:
    """
    '오늘 벌었나요?' 체크인 서비스.
    사용자당 하루 한 건만 유지하며, 같은 날 다시 체크인하면 결과를 덮어씁니다.
    """
    def __init__(self, store: DocumentStore):
        self.store = store

    @staticmethod
    def _check_in_id(user_id: str, check_date: date) -> str:
        return f"{user_id}_{check_date.strftime('%Y%m%d')}"

    def create_check_in(self, user_id: Optional[str], result: str, check_date: Optional[date] = None) -> Dict[str, Any]:
        user_id = require_user_id(user_id)
        if result not in {r.value for r in CheckInResult}:
            raise InvalidArgument("result 需为 yes 或 no")
        check_date = check_date or DateTimeUtils.today()

        check_in = CheckIn(
            check_in_id=self._check_in_id(user_id, check_date),
            user_id=user_id,
            result=result,
            date=DateTimeUtils.to_date_string(check_date)
        )
        try:
            self.store.add(CHECK_INS, asdict(check_in), doc_id=check_in.check_in_id)
        except Exception as e:
            logger.error(f"체크인 저장 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise Internal(f"数据库写入失败: {e}")
        logger.info(f"체크인 완료 (user_id: {user_id}, date: {check_in.date}, result: {result})")
        return asdict(check_in)

    def get_history(self, user_id: Optional[str], year: int, month: int) -> List[Dict[str, Any]]:
        """해당 월의 체크인 기록을 날짜 오름차순으로 반환합니다 (달력 표시용)."""
        user_id = require_user_id(user_id)
        try:
            start, end = DateTimeUtils.month_range(year, month)
        except ValueError as e:
            raise InvalidArgument(str(e))

        try:
            return self.store.query(
                CHECK_INS,
                [('user_id', '==', user_id), ('date', '>=', start), ('date', '<=', end)],
                order_by='date'
            )
        except Exception as e:
            logger.error(f"체크인 기록 조회 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise Internal(f"获取打卡记录失败: {e}")

    def get_today_stats(self) -> Dict[str, Any]:
        """오늘의 체크인 통계 (전체/수익/손실 인원과 비율)"""
        today = DateTimeUtils.to_date_string(DateTimeUtils.today())
        try:
            total_count = self.store.count(CHECK_INS, [('date', '==', today)])
            yes_count = self.store.count(CHECK_INS, [('date', '==', today), ('result', '==', CheckInResult.YES.value)])
            no_count = self.store.count(CHECK_INS, [('date', '==', today), ('result', '==', CheckInResult.NO.value)])
        except Exception as e:
            logger.error(f"오늘 체크인 통계 조회 실패: {e}", exc_info=True)
            raise Internal("获取统计数据失败")

        yes_percentage = round(yes_count / total_count * 100) if total_count else 0
        no_percentage = round(no_count / total_count * 100) if total_count else 0
        return {
            "date": today,
            "total_count": total_count,
            "yes_count": yes_count,
            "no_count": no_count,
            "yes_percentage": yes_percentage,
            "no_percentage": no_percentage,
            "message": f"今日 {yes_percentage}% 的人赚了" if total_count else "今日还没有人打卡",
        }
