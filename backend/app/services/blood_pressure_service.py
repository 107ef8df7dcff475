"""
Blood pressure record service.
"""
import logging

from app.models.blood_pressure import BloodPressure
from app.utils.result import Result

logger = logging.getLogger(__name__)

MSG_NOT_FOUND = '血压记录不存在'
MSG_UPDATE_FAILED = '修改血压记录失败'
MSG_DELETE_FAILED = '删除血压记录失败'

_FIELDS = ('systolic', 'diastolic', 'heart_rate', 'date', 'time')


def _values_from(form: dict) -> dict:
    values = {
        'systolic': int(form['systolic']),
        'diastolic': int(form['diastolic']),
        'heart_rate': int(form['heart_rate']) if form.get('heart_rate') is not None else None,
        'date': form['date'],
        'time': form.get('time') or None,
    }
    return {k: values[k] for k in _FIELDS}


class BloodPressureService:

    def __init__(self, blood_pressure_mapper):
        self.mapper = blood_pressure_mapper

    def create_blood_pressure(self, account_id, form: dict):
        """Returns the created record, or None if it could not be stored."""
        record = BloodPressure(account_id=account_id, **_values_from(form))
        if not self.mapper.insert(record):
            return None
        return record

    def delete_blood_pressure(self, record_id) -> Result:
        if self.mapper.select_by_id(record_id) is None:
            return Result.failure(MSG_NOT_FOUND)
        if not self.mapper.delete_by_id(record_id):
            return Result.failure(MSG_DELETE_FAILED)
        return Result.success()

    def update_blood_pressure(self, form: dict) -> Result:
        record_id = int(form['id'])
        if self.mapper.select_by_id(record_id) is None:
            return Result.failure(MSG_NOT_FOUND)
        if not self.mapper.update_by_id(record_id, _values_from(form)):
            return Result.failure(MSG_UPDATE_FAILED)
        return Result.success()

    def get_blood_pressure(self, account_id, date):
        return self.mapper.select_by_account_and_date(account_id, date)
