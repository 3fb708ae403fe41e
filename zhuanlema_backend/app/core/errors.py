# app/core/errors.py
from typing import Optional

class ServiceError(Exception):
    """
    서비스 계층 기본 예외 클래스.
    라우트 경계에서 실패 응답({"success": false, ...})으로 변환됩니다.
    """
    status_code = 500
    error_code = "INTERNAL"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

class InvalidArgument(ServiceError):
    status_code = 400
    error_code = "INVALID_ARGUMENT"

class Unauthenticated(ServiceError):
    status_code = 401
    error_code = "UNAUTHENTICATED"

class PermissionDenied(ServiceError):
    status_code = 403
    error_code = "PERMISSION_DENIED"

class NotFound(ServiceError):
    status_code = 404
    error_code = "NOT_FOUND"

class Internal(ServiceError):
    status_code = 500
    error_code = "INTERNAL"
