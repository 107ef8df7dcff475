"""
Blood pressure API routes. All endpoints act on behalf of the token's account.
"""
from flask import Blueprint, request, g, current_app

from app.utils.audit_logger import audit_log, audit_access
from app.utils.auth import token_required
from app.utils.rest_bean import RestBean
from app.utils.validators import (
    validate_blood_pressure_create, validate_blood_pressure_update, validate_date,
)
from . import json_body, invalid, missing_body

blood_pressure_bp = Blueprint('blood_pressure', __name__)


def _blood_pressure_service():
    return current_app.extensions['blood_pressure_service']


@blood_pressure_bp.route('/create', methods=['POST'])
@token_required
def record_blood_pressure():
    """Add a blood pressure record for the caller."""
    data = json_body()
    if data is None:
        return missing_body()

    errors = validate_blood_pressure_create(data)
    if errors:
        return invalid(errors)

    record = _blood_pressure_service().create_blood_pressure(g.account_id, data)
    if record is None:
        return RestBean.failure(400, '添加血压记录失败').as_response()

    audit_log('CREATE', 'blood_pressure', resource_id=str(record.id))
    return RestBean.success(record.to_dict()).as_response()


@blood_pressure_bp.route('/delete', methods=['GET'])
@token_required
def delete_blood_pressure():
    """Delete a record by id."""
    raw_id = request.args.get('id', '').strip()
    if not raw_id:
        return invalid(['记录ID不能为空'])
    try:
        record_id = int(raw_id)
    except ValueError:
        return invalid(['记录ID必须为整数'])

    result = _blood_pressure_service().delete_blood_pressure(record_id)
    if result.ok:
        audit_log('DELETE', 'blood_pressure', resource_id=str(record_id))
    return RestBean.from_result(result).as_response()


@blood_pressure_bp.route('/update', methods=['POST'])
@token_required
def update_blood_pressure():
    """Replace the values of an existing record."""
    data = json_body()
    if data is None:
        return missing_body()

    errors = validate_blood_pressure_update(data)
    if errors:
        return invalid(errors)

    result = _blood_pressure_service().update_blood_pressure(data)
    if result.ok:
        audit_log('UPDATE', 'blood_pressure', resource_id=str(data['id']))
    return RestBean.from_result(result).as_response()


@blood_pressure_bp.route('/get', methods=['GET'])
@token_required
@audit_access('READ', 'blood_pressure')
def get_blood_pressure():
    """List the caller's records for one day (?date=YYYY-MM-DD)."""
    date = request.args.get('date')
    if not date:
        return invalid(['日期不能为空'])
    if not validate_date(date):
        return invalid(['日期格式必须为YYYY-MM-DD'])

    records = _blood_pressure_service().get_blood_pressure(g.account_id, date)
    return RestBean.success([r.to_dict() for r in records]).as_response()
