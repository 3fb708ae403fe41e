# app/api/users/routes.py
from flask import Blueprint, current_app

from app.api.users.schemas import UserStatsResponseSchema
from app.core.responses import success_response

users_bp = Blueprint('users_bp', __name__)

@users_bp.route('/<string:user_id>/stats', methods=['GET'])
def get_user_stats(user_id: str):
    """
    사용자의 체크인 수, 게시글 수, 받은 좋아요 합계를 조회합니다.
    비로그인 상태에서도 다른 사용자의 프로필 통계를 볼 수 있습니다.
    """
    user_service = current_app.services['users']
    stats = user_service.get_user_stats(user_id)
    return success_response(UserStatsResponseSchema().dump(stats))
