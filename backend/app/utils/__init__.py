from .result import Result
from .rest_bean import RestBean, message_handle
from .audit_logger import audit_log, audit_access
from .auth import generate_token, token_required
from .rate_limiter import DBRateLimiter, rate_limit
