# app/api/feedback/routes.py
from flask import Blueprint, current_app

from app.api.feedback.schemas import FeedbackCreateSchema
from app.api.request_utils import current_user_id, json_body
from app.core.responses import success_response

feedback_bp = Blueprint('feedback_bp', __name__)

@feedback_bp.route('', methods=['POST'])
def submit_feedback():
    """사용자 의견을 접수합니다. 로그인하지 않아도 제출할 수 있습니다."""
    feedback_service = current_app.services['feedback']
    data = FeedbackCreateSchema().load(json_body())
    feedback_id = feedback_service.submit_feedback(data['content'], data['contact'], current_user_id())
    return success_response({"feedback_id": feedback_id}, message="提交成功，感谢您的反馈", status_code=201)
