"""
Development server for the account and blood pressure API.

Console email/SMS backends log issued codes at INFO, so LOG_LEVEL defaults to
INFO here. A SQLite DATABASE_URL gets its tables created on start; other
databases are expected to be migrated with `flask db upgrade`.
"""
import logging
import os

from app import create_app, db

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = create_app()


def _prepare_sqlite():
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
        with app.app_context():
            db.create_all()


if __name__ == '__main__':
    if os.getenv('FLASK_ENV') == 'production':
        raise RuntimeError('run.py is for development; serve the app with a WSGI server')

    _prepare_sqlite()
    if app.config['EMAIL_BACKEND'] == 'console' or app.config['SMS_BACKEND'] == 'console':
        logging.getLogger(__name__).info('Verification codes are written to this log')

    app.run(
        host=os.getenv('FLASK_HOST', '127.0.0.1'),
        port=int(os.getenv('FLASK_PORT', 8080)),
        debug=os.getenv('FLASK_DEBUG', '1') == '1',
    )
