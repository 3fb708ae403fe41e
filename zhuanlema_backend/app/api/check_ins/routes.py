# app/api/check_ins/routes.py
from flask import Blueprint, request, current_app

from app.api.check_ins.schemas import CheckInCreateSchema, CheckInHistoryQuerySchema, CheckInResponseSchema
from app.api.request_utils import current_user_id, json_body
from app.core.responses import success_response
from app.utils.validators import require_user_id

check_ins_bp = Blueprint('check_ins_bp', __name__)

@check_ins_bp.route('', methods=['POST'])
def create_check_in():
    """오늘(또는 지정한 날짜)의 수익 여부를 체크인합니다."""
    check_in_service = current_app.services['check_ins']
    user_id = require_user_id(current_user_id())
    data = CheckInCreateSchema().load(json_body())
    check_in = check_in_service.create_check_in(user_id, data['result'], data.get('date'))
    return success_response(CheckInResponseSchema().dump(check_in), message="打卡成功", status_code=201)

@check_ins_bp.route('/history', methods=['GET'])
def get_check_in_history():
    """?year=YYYY&month=M 에 해당하는 월의 체크인 기록을 조회합니다."""
    check_in_service = current_app.services['check_ins']
    user_id = require_user_id(current_user_id())
    query = CheckInHistoryQuerySchema().load(request.args)
    history = check_in_service.get_history(user_id, query['year'], query['month'])
    return success_response(CheckInResponseSchema(many=True).dump(history))

@check_ins_bp.route('/today', methods=['GET'])
def get_today_stats():
    check_in_service = current_app.services['check_ins']
    return success_response(check_in_service.get_today_stats())
