# app/utils/__init__.py
"""
유틸리티 모듈 패키지

프로젝트 전체에서 공통으로 사용되는 유틸리티 함수들을 포함합니다.
"""

from .datetime_utils import DateTimeUtils
from .validators import require_document_id, require_user_id
from .hot_score import calc_hot_score

__all__ = [
    'DateTimeUtils',
    'require_document_id', 'require_user_id',
    'calc_hot_score'
]
