"""
Authentication utilities for JWT tokens.
"""
import secrets
import jwt
from datetime import datetime, timedelta
from functools import wraps
from flask import request, g, current_app

from .rest_bean import RestBean


def _jwt_secret() -> str:
    secret = current_app.config.get('JWT_SECRET_KEY')
    if not secret:
        raise RuntimeError('JWT_SECRET_KEY is not configured')
    return secret


def generate_token(account_id: int, username: str, role: str) -> dict:
    """
    Issue a signed JWT for an account.
    Returns the token together with its expiry so the client can schedule re-login.
    """
    expires = int(current_app.config.get('JWT_ACCESS_TOKEN_EXPIRES', 7 * 24 * 3600))
    expire_at = datetime.utcnow() + timedelta(seconds=expires)

    payload = {
        'id': account_id,
        'name': username,
        'role': role,
        'jti': secrets.token_hex(16),
        'exp': expire_at,
        'iat': datetime.utcnow()
    }

    return {
        'token': jwt.encode(payload, _jwt_secret(), algorithm='HS256'),
        'expire': expire_at.isoformat(),
    }


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token. Returns None when invalid or expired."""
    try:
        return jwt.decode(token, _jwt_secret(), algorithms=['HS256'])
    except jwt.InvalidTokenError:
        return None


def _bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None
    return parts[1]


def token_required(f):
    """Decorator to require a valid, unrevoked JWT for a route.

    Populates the request-scoped caller identity:
    g.account_id, g.username, g.role, g.token_jti, g.token_exp
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return RestBean.failure(401, '请先登录').as_response()

        payload = decode_token(token)
        if not payload:
            return RestBean.failure(401, '登录已过期，请重新登录').as_response()

        from app.models.revoked_token import RevokedToken
        if RevokedToken.is_token_revoked(payload.get('jti')):
            return RestBean.failure(401, '登录已失效，请重新登录').as_response()

        g.account_id = payload.get('id')
        g.username = payload.get('name')
        g.role = payload.get('role')
        g.token_jti = payload.get('jti')
        g.token_exp = payload.get('exp')

        return f(*args, **kwargs)
    return wrapper
