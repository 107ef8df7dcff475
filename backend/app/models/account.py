"""
Account model.
"""
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from app import db

ROLE_DEFAULT = 'user'


class Account(db.Model):
    """
    Login identity. An account is reachable by username, email or phone;
    email and phone are optional because either channel can register.
    """
    __tablename__ = 'accounts'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(32), nullable=False, unique=True, index=True)
    password = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True, unique=True, index=True)
    phone = db.Column(db.String(20), nullable=True, unique=True, index=True)
    role = db.Column(db.String(20), nullable=False, default=ROLE_DEFAULT)
    register_time = db.Column(db.DateTime, default=datetime.utcnow)

    blood_pressures = db.relationship('BloodPressure', backref='account', lazy='dynamic')

    def set_password(self, raw_password: str):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password_hash(self.password, raw_password)

    def to_dict(self):
        """Password hash is never serialized."""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'phone': self.phone,
            'role': self.role,
            'register_time': self.register_time.isoformat() if self.register_time else None,
        }

    def __repr__(self):
        return f'<Account {self.id}: {self.username}>'
