# app/services/identity_service.py
import logging
from typing import Optional

from flask import Request, current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

logger = logging.getLogger(__name__)

class IdentityResolver:
    """요청에서 호출자의 user_id를 찾아내는 인터페이스."""

    def resolve(self, request: Request) -> Optional[str]:
        raise NotImplementedError

class JwtIdentityResolver(IdentityResolver):
    """
    JWT 액세스 토큰으로 사용자를 식별합니다.
    1. Authorization: Bearer <token> 헤더
    2. JSON 본문의 access_token 필드 (구버전 클라이언트 호환)
    토큰이 없거나 유효하지 않으면 None을 반환하고, 예외를 던지지 않습니다.
    """

    def resolve(self, request: Request) -> Optional[str]:
        user_id = self._from_header()
        if user_id:
            return user_id
        return self._from_body(request)

    def _from_header(self) -> Optional[str]:
        try:
            verify_jwt_in_request(optional=True)
            identity = get_jwt_identity()
        except (JWTExtendedException, PyJWTError) as e:
            logger.info(f"Authorization 헤더 토큰 검증 실패: {e}")
            return None
        return str(identity) if identity else None

    def _from_body(self, request: Request) -> Optional[str]:
        body = request.get_json(silent=True)
        token = body.get('access_token') if isinstance(body, dict) else None
        if not token or not isinstance(token, str):
            return None
        try:
            claims = decode_token(token)
        except (JWTExtendedException, PyJWTError) as e:
            logger.info(f"본문 access_token 검증 실패: {e}")
            return None
        identity = claims.get(current_app.config.get('JWT_IDENTITY_CLAIM', 'sub'))
        return str(identity) if identity else None
