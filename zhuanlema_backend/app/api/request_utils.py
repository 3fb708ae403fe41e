# app/api/request_utils.py
from typing import Any, Dict, Optional
from flask import request, current_app

def current_user_id() -> Optional[str]:
    """주입된 IdentityResolver로 호출자를 식별합니다. 식별하지 못하면 None."""
    return current_app.services['identity'].resolve(request)

def json_body() -> Dict[str, Any]:
    """JSON 본문을 딕셔너리로 반환합니다. 본문이 없거나 JSON이 아니면 빈 딕셔너리."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}

def page_limit() -> int:
    """?limit 값을 1 ~ MAX_PAGE_SIZE 범위로 맞춥니다."""
    default = current_app.config.get('DEFAULT_PAGE_SIZE', 20)
    maximum = current_app.config.get('MAX_PAGE_SIZE', 100)
    limit = request.args.get('limit', default, type=int)
    return min(max(limit, 1), maximum)

def page_offset() -> int:
    return max(request.args.get('offset', 0, type=int), 0)
