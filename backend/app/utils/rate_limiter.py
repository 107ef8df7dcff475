"""
Persistent DB-backed rate limiter.
"""
from functools import wraps
from flask import request

from .rest_bean import RestBean


class DBRateLimiter:
    """Database-backed rate limiter that persists across server restarts."""

    def __init__(self, max_attempts=5, window_seconds=60, endpoint_name='default'):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.endpoint_name = endpoint_name

    def is_limited(self, key):
        from app.models.rate_limit_entry import RateLimitEntry
        count = RateLimitEntry.count_recent(key, self.endpoint_name, self.window_seconds)
        return count >= self.max_attempts

    def record(self, key):
        from app.models.rate_limit_entry import RateLimitEntry
        RateLimitEntry.add(key, self.endpoint_name)

    def attempt(self, key) -> bool:
        """Record an attempt unless the key is over its limit. Returns False when limited."""
        if self.is_limited(key):
            return False
        self.record(key)
        return True


# One verification code per IP per minute, per channel
email_code_limiter = DBRateLimiter(max_attempts=1, window_seconds=60, endpoint_name='verify_email')
phone_code_limiter = DBRateLimiter(max_attempts=1, window_seconds=60, endpoint_name='verify_phone')

# Login: 5 attempts per minute per IP
login_limiter = DBRateLimiter(max_attempts=5, window_seconds=60, endpoint_name='login')


def rate_limit(limiter):
    """Decorator factory to rate-limit an endpoint by client IP using a given limiter."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            client_ip = request.remote_addr or 'unknown'
            if not limiter.attempt(client_ip):
                return RestBean.failure(429, '请求过于频繁，请稍后再试').as_response()
            return f(*args, **kwargs)
        return wrapper
    return decorator
