"""
Shared pytest fixtures.

Every test gets a fresh app bound to an in-memory SQLite database. Fixtures
that need the ORM open their own app context; requests made through the test
client push theirs.
"""
import os
from unittest.mock import MagicMock

import pytest

os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('EMAIL_BACKEND', 'console')
os.environ.setdefault('SMS_BACKEND', 'console')

from app import create_app, db  # noqa: E402
from app.models import Account, VerificationCode  # noqa: E402
from app.utils.auth import generate_token  # noqa: E402
from app.utils.result import Result  # noqa: E402


@pytest.fixture(scope='session')
def audit_log_file(tmp_path_factory):
    return str(tmp_path_factory.mktemp('logs') / 'audit.log')


@pytest.fixture
def app(audit_log_file):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'AUDIT_LOG_FILE': audit_log_file,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def account(app):
    """A registered account: username 'alice', password 'secret123'."""
    with app.app_context():
        acc = Account(username='alice', email='alice@qq.com', phone='13800138000')
        acc.set_password('secret123')
        db.session.add(acc)
        db.session.commit()
        return {'id': acc.id, 'username': acc.username, 'email': acc.email, 'phone': acc.phone}


@pytest.fixture
def auth_headers(app, account):
    with app.app_context():
        token = generate_token(account['id'], account['username'], 'user')['token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def mock_account_service(app):
    """Replace the injected AccountService with a mock that succeeds by default."""
    service = MagicMock()
    for name in ('send_email_verification_code', 'send_phone_verification_code',
                 'register_email_account', 'email_confirm_reset',
                 'reset_email_account_password', 'login'):
        getattr(service, name).return_value = Result.success()
    app.extensions['account_service'] = service
    return service


@pytest.fixture
def latest_code(app):
    """Look up the newest code issued to a target."""
    def _latest(target, type_, channel='email'):
        with app.app_context():
            verification = VerificationCode.find_active(channel, target, type_)
            return verification.code if verification else None
    return _latest
