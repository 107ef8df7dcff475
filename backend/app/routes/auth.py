"""
Authorization API routes: verification codes, registration, password reset,
login and logout.
"""
from datetime import datetime, timezone
from flask import Blueprint, request, g, current_app

from app import db
from app.models.revoked_token import RevokedToken
from app.utils.audit_logger import audit_log
from app.utils.auth import token_required
from app.utils.rate_limiter import rate_limit, login_limiter
from app.utils.rest_bean import RestBean, message_handle
from app.utils.validators import (
    validate_email_code_request, validate_phone_code_request, validate_email_register,
    validate_confirm_reset, validate_email_reset, validate_login,
)
from . import json_body, invalid, missing_body

auth_bp = Blueprint('auth', __name__)


def _account_service():
    return current_app.extensions['account_service']


def _client_ip():
    return request.remote_addr or 'unknown'


@auth_bp.route('/email-code', methods=['GET'])
def ask_verify_code():
    """Request an email verification code (type=register|reset)."""
    errors = validate_email_code_request(request.args)
    if errors:
        return invalid(errors)

    email = request.args['email'].strip()
    type_ = request.args['type']
    return message_handle(lambda: _account_service().send_email_verification_code(
        type_, email, _client_ip()))


@auth_bp.route('/phone-code', methods=['GET'])
def ask_phone_code():
    """Request an SMS verification code (type=register|reset)."""
    errors = validate_phone_code_request(request.args)
    if errors:
        return invalid(errors)

    phone = request.args['phone']
    type_ = request.args['type']
    return message_handle(lambda: _account_service().send_phone_verification_code(
        type_, phone, _client_ip()))


@auth_bp.route('/email-register', methods=['POST'])
def register():
    """Register with email; a register-type email code must be requested first."""
    data = json_body()
    if data is None:
        return missing_body()

    errors = validate_email_register(data)
    if errors:
        return invalid(errors)

    result = _account_service().register_email_account(data)
    if result.ok:
        audit_log('CREATE', 'account',
                  details={'action': 'email_register', 'username': data['username']})
    return RestBean.from_result(result).as_response()


@auth_bp.route('/reset-confirm', methods=['POST'])
def reset_confirm():
    """Check a reset-type email code without consuming it."""
    data = json_body()
    if data is None:
        return missing_body()

    errors = validate_confirm_reset(data)
    if errors:
        return invalid(errors)

    return message_handle(lambda: _account_service().email_confirm_reset(data))


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password():
    """Set a new password using a reset-type email code."""
    data = json_body()
    if data is None:
        return missing_body()

    errors = validate_email_reset(data)
    if errors:
        return invalid(errors)

    result = _account_service().reset_email_account_password(data)
    if result.ok:
        audit_log('UPDATE', 'account', details={'action': 'password_reset'})
    return RestBean.from_result(result).as_response()


@auth_bp.route('/login', methods=['POST'])
@rate_limit(login_limiter)
def login():
    """Log in with username (or email) and password. Returns a bearer token."""
    data = json_body()
    if data is None:
        return missing_body()

    errors = validate_login(data)
    if errors:
        return invalid(errors)

    result = _account_service().login(str(data['username']).strip(), str(data['password']))
    if result.ok:
        audit_log('LOGIN', 'account', resource_id=str(result.data['id']),
                  account_id=str(result.data['id']))
    else:
        audit_log('LOGIN_FAILED', 'account', details={'reason': 'bad_credentials'})
    return RestBean.from_result(result).as_response()


@auth_bp.route('/logout', methods=['POST'])
@token_required
def logout():
    """Revoke the current token."""
    revoked = RevokedToken(
        jti=g.token_jti,
        account_id=g.account_id,
        expires_at=datetime.fromtimestamp(g.token_exp, timezone.utc).replace(tzinfo=None)
    )
    db.session.add(revoked)
    db.session.commit()

    audit_log('LOGOUT', 'account', resource_id=str(g.account_id))

    return RestBean.success().as_response()
