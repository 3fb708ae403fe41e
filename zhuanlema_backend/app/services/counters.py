# app/services/counters.py
"""
비정규화 카운터(like_count, comment_count) 보정 함수

카운터는 조회 성능을 위해 문서에 저장하며, 감소 경로는 항상
1) 원자적 감소 2) 실제 값 재조회 3) 음수면 0으로 보정 순서로 처리합니다.
"""
import logging
from typing import Any, Dict, Optional, Sequence

from app.services.document_store import DocumentStore, Filter

logger = logging.getLogger(__name__)

def read_counter(doc: Optional[Dict[str, Any]], field: str) -> int:
    """문서의 카운터 값을 읽습니다. 값이 없거나 숫자가 아니면 0."""
    value = (doc or {}).get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)

def decrement_clamped(store: DocumentStore, collection: str, doc_id: str, field: str) -> int:
    """
    카운터를 1 감소시키고, 재조회한 실제 값을 반환합니다.
    동시 감소로 음수가 되었으면 0으로 보정 쓰기를 합니다.
    """
    store.increment(collection, doc_id, field, -1)
    value = read_counter(store.get(collection, doc_id), field)
    if value < 0:
        logger.warning(f"음수 카운터 보정 ({collection}/{doc_id}.{field}: {value} -> 0)")
        store.update(collection, doc_id, {field: 0})
        value = 0
    return value

def remove_likes(store: DocumentStore, collection: str, filters: Sequence[Filter]) -> int:
    """
    조건에 맞는 좋아요 기록을 한 건씩 삭제하고, 이 호출이 실제로 지운 개수를 반환합니다.
    같은 기록을 동시에 지우면 한쪽만 1로 집계되므로 카운터가 두 번 감소하지 않습니다.
    """
    removed = 0
    for like in store.query(collection, filters):
        like_id = like.get('like_id')
        if like_id and store.remove(collection, like_id):
            removed += 1
    return removed
