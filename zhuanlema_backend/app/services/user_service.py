# app/services/user_service.py
import logging
from typing import Any, Dict

from app.core.errors import Internal
from app.services.counters import read_counter
from app.services.document_store import DocumentStore
from app.utils.validators import require_document_id

logger = logging.getLogger(__name__)

USERS = 'users'
POSTS = 'posts'
CHECK_INS = 'check_ins'
DEFAULT_NICKNAME = "用户"

class UserService:
    """
    사용자 관련 읽기 전용 서비스.
    사용자 문서는 인증 시스템이 관리하며, 여기서는 닉네임 표시와 활동 통계만 조회합니다.
    """
    def __init__(self, store: DocumentStore):
        self.store = store

    def get_nickname(self, user_id: str) -> str:
        """닉네임을 조회합니다. 사용자 문서가 없거나 조회에 실패하면 기본 닉네임을 반환합니다."""
        try:
            user = self.store.get(USERS, user_id)
        except Exception as e:
            logger.warning(f"닉네임 조회 실패 (user_id: {user_id}): {e}")
            return DEFAULT_NICKNAME
        nickname = (user or {}).get('nickname')
        if isinstance(nickname, str) and nickname.strip():
            return nickname.strip()
        return DEFAULT_NICKNAME

    def get_user_stats(self, user_id: Any) -> Dict[str, Any]:
        """
        프로필 화면용 활동 통계.
        - check_in_count: 체크인 횟수
        - post_count: 삭제되지 않은 게시글 수
        - total_like_count: 그 게시글들이 받은 좋아요 합계
        """
        user_id = require_document_id(user_id, "userId")
        try:
            check_in_count = self.store.count(CHECK_INS, [('user_id', '==', user_id)])
            posts = self.store.query(POSTS, [('user_id', '==', user_id), ('is_deleted', '==', False)])
        except Exception as e:
            logger.error(f"사용자 통계 조회 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise Internal(f"获取用户统计失败: {e}")

        return {
            "user_id": user_id,
            "check_in_count": check_in_count,
            "post_count": len(posts),
            "total_like_count": sum(max(0, read_counter(p, 'like_count')) for p in posts),
        }
