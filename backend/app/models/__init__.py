from .account import Account
from .blood_pressure import BloodPressure
from .verification_code import VerificationCode
from .rate_limit_entry import RateLimitEntry
from .revoked_token import RevokedToken
