import os
import logging
from flask import Flask, request, redirect
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

logger = logging.getLogger(__name__)

_HTTP_MESSAGES = {
    400: '请求参数有误',
    401: '请先登录',
    403: '没有访问权限',
    404: '请求的资源不存在',
    405: '请求方法不被允许',
    413: '请求体过大',
    415: '请求体必须为JSON',
}


def create_app(test_config=None):
    app = Flask(__name__)

    is_production = os.getenv('FLASK_ENV') == 'production'

    app.config.from_mapping(
        SECRET_KEY=os.getenv('SECRET_KEY'),
        SQLALCHEMY_DATABASE_URI=os.getenv('DATABASE_URL'),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JWT_SECRET_KEY=os.getenv('JWT_SECRET_KEY'),
        JWT_ACCESS_TOKEN_EXPIRES=int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 7 * 24 * 3600)),
        EMAIL_BACKEND=os.getenv('EMAIL_BACKEND', 'console'),
        SMS_BACKEND=os.getenv('SMS_BACKEND', 'console'),
        AUDIT_LOG_FILE=os.getenv('AUDIT_LOG_FILE', 'logs/audit.log'),
        # Request size limit (1 MB)
        MAX_CONTENT_LENGTH=1 * 1024 * 1024,
    )
    if test_config:
        app.config.update(test_config)

    # No insecure fallback for SECRET_KEY
    if not app.config['SECRET_KEY']:
        raise RuntimeError('SECRET_KEY environment variable is required')
    if not app.config['JWT_SECRET_KEY']:
        app.config['JWT_SECRET_KEY'] = app.config['SECRET_KEY']

    database_url = app.config['SQLALCHEMY_DATABASE_URI']
    if not database_url:
        raise RuntimeError('DATABASE_URL environment variable is required')
    if not database_url.startswith('sqlite'):
        app.config.setdefault('SQLALCHEMY_ENGINE_OPTIONS', {
            'pool_pre_ping': True,
            'pool_recycle': 300,
        })

    app.json.ensure_ascii = False

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # CORS: restrict origins
    allowed_origins = os.getenv('ALLOWED_ORIGINS', '')
    if allowed_origins:
        origins_list = [o.strip() for o in allowed_origins.split(',') if o.strip()]
    elif is_production:
        raise RuntimeError(
            'ALLOWED_ORIGINS environment variable is required in production'
        )
    else:
        # Development: allow localhost variants
        origins_list = [
            'http://localhost:*',
            'http://127.0.0.1:*',
        ]

    CORS(app, resources={r"/api/*": {"origins": origins_list}})

    # Redirect HTTP to HTTPS in production
    if is_production:
        @app.before_request
        def enforce_https():
            if not request.is_secure and request.headers.get('X-Forwarded-Proto', 'http') != 'https':
                url = request.url.replace('http://', 'https://', 1)
                return redirect(url, code=301)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        response.headers['Referrer-Policy'] = 'no-referrer'
        if is_production or request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    from app.utils.rest_bean import RestBean

    # POST bodies are JSON forms
    @app.before_request
    def validate_content_type():
        if request.method in ('POST', 'PUT') and request.path != '/health':
            content_type = request.content_type or ''
            if 'application/json' not in content_type:
                return RestBean.failure(415, _HTTP_MESSAGES[415]).as_response()

    register_error_handlers(app)

    from app.utils.audit_logger import setup_audit_logging
    setup_audit_logging(app)

    register_services(app)

    from app.routes.auth import auth_bp
    from app.routes.blood_pressure import blood_pressure_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(blood_pressure_bp, url_prefix='/api/blood-pressure')

    @app.route('/health')
    def health():
        return {'status': 'healthy'}, 200

    @app.cli.command('cleanup-revoked-tokens')
    def cleanup_revoked_tokens():
        """Remove expired revoked token entries."""
        from app.models.revoked_token import RevokedToken
        count = RevokedToken.cleanup_expired()
        print(f'Removed {count} expired revoked token(s).')

    @app.cli.command('cleanup-rate-limits')
    def cleanup_rate_limits():
        """Remove rate limit entries older than 5 minutes."""
        from app.models.rate_limit_entry import RateLimitEntry
        count = RateLimitEntry.cleanup_older_than(300)
        print(f'Removed {count} old rate limit entry/entries.')

    return app


def register_services(app):
    """Build the service graph once and expose it through app.extensions."""
    from app.mappers import AccountMapper, BloodPressureMapper
    from app.services import AccountService, BloodPressureService
    from app.utils.auth import generate_token
    from app.utils.email_sender import EmailCodeSender, get_email_backend
    from app.utils.rate_limiter import email_code_limiter, phone_code_limiter
    from app.utils.sms_sender import SmsCodeSender, get_sms_backend

    app.extensions['account_service'] = AccountService(
        account_mapper=AccountMapper(),
        email_limiter=email_code_limiter,
        phone_limiter=phone_code_limiter,
        email_sender=EmailCodeSender(get_email_backend(app.config['EMAIL_BACKEND'])),
        sms_sender=SmsCodeSender(get_sms_backend(app.config['SMS_BACKEND'])),
        token_issuer=generate_token,
    )
    app.extensions['blood_pressure_service'] = BloodPressureService(BloodPressureMapper())


def register_error_handlers(app):
    """Render framework and unexpected errors through the RestBean envelope."""
    from app.utils.rest_bean import RestBean

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        code = e.code or 500
        return RestBean.failure(code, _HTTP_MESSAGES.get(code, e.name)).as_response()

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        logger.error('Unhandled error on %s %s', request.method, request.path, exc_info=e)
        return RestBean.failure(500, '内部错误').as_response()
