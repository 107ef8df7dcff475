from .base import BaseMapper
from .account_mapper import AccountMapper
from .blood_pressure_mapper import BloodPressureMapper
