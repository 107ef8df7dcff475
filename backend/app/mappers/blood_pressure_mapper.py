from app.models.blood_pressure import BloodPressure
from .base import BaseMapper


class BloodPressureMapper(BaseMapper):
    model = BloodPressure

    def select_by_account_and_date(self, account_id, date):
        return self.select_list(BloodPressure.time, BloodPressure.id,
                                account_id=account_id, date=date)
