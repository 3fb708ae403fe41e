# app/core/responses.py
from typing import Any, Optional
from flask import jsonify

from app.core.errors import ServiceError

def success_response(data: Optional[Any] = None, message: Optional[str] = None, status_code: int = 200):
    """성공 응답 봉투 {success, data?, message?}를 만듭니다."""
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status_code

def failure_response(error: ServiceError, details: Optional[Any] = None):
    """ServiceError를 실패 응답 봉투로 변환합니다."""
    body = {"success": False, "error_code": error.error_code, "message": error.message}
    if details is not None:
        body["details"] = details
    return jsonify(body), error.status_code
