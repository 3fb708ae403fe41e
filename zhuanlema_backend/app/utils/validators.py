# app/utils/validators.py
import re
from typing import Any, Optional

from app.core.errors import InvalidArgument, Unauthenticated

# Firestore 문서 ID 규칙: '/' 불가, '.' 및 '..' 불가, 최대 1500바이트 (여기서는 128자로 제한)
_DOCUMENT_ID_PATTERN = re.compile(r'^[^/\s]{1,128}$')

def is_document_id(value: Any) -> bool:
    return (
        isinstance(value, str)
        and value not in ('.', '..')
        and not (value.startswith('__') and value.endswith('__'))
        and bool(_DOCUMENT_ID_PATTERN.match(value))
    )

def require_document_id(value: Any, field_name: str) -> str:
    """문서 ID 형식이 아니면 InvalidArgument를 발생시킵니다."""
    if value is None or value == "":
        raise InvalidArgument(f"缺少 {field_name}")
    if not is_document_id(value):
        raise InvalidArgument(f"{field_name} 格式无效")
    return value

def require_user_id(user_id: Optional[str]) -> str:
    """호출자를 식별하지 못했으면 Unauthenticated를 발생시킵니다."""
    if not user_id:
        raise Unauthenticated("未登录")
    return user_id
