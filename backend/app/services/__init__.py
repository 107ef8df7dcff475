from .account_service import AccountService
from .blood_pressure_service import BloodPressureService
