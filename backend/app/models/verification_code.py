"""
Verification code model for 6-digit email and SMS codes.
"""
import secrets
from datetime import datetime, timedelta
from app import db

CODE_TTL_MINUTES = 3


class VerificationCode(db.Model):
    """Stores outstanding verification codes keyed by channel, target and purpose."""
    __tablename__ = 'verification_codes'

    id = db.Column(db.Integer, primary_key=True)
    channel = db.Column(db.String(10), nullable=False)  # 'email' or 'phone'
    target = db.Column(db.String(255), nullable=False, index=True)
    type = db.Column(db.String(10), nullable=False)  # 'register' or 'reset'
    code = db.Column(db.String(6), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    used_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @staticmethod
    def generate_code():
        """Generate a 6-digit numeric verification code."""
        return str(secrets.randbelow(1000000)).zfill(6)

    @classmethod
    def _outstanding(cls, channel, target, type_):
        return cls.query.filter_by(
            channel=channel, target=target, type=type_, used_at=None
        )

    @classmethod
    def issue(cls, channel, target, type_):
        """Expire unused codes for this target, then create a new one (3-min expiry)."""
        cls._outstanding(channel, target, type_).update(
            {'expires_at': datetime.utcnow()}
        )

        verification = cls(
            channel=channel,
            target=target,
            type=type_,
            code=cls.generate_code(),
            expires_at=datetime.utcnow() + timedelta(minutes=CODE_TTL_MINUTES)
        )
        db.session.add(verification)
        db.session.commit()
        return verification

    @classmethod
    def find_active(cls, channel, target, type_):
        """Most recent unused, unexpired code for this target, or None."""
        return (cls._outstanding(channel, target, type_)
                .filter(cls.expires_at > datetime.utcnow())
                .order_by(cls.id.desc())
                .first())

    @classmethod
    def consume(cls, channel, target, type_):
        """Mark every outstanding code for this target as used."""
        cls._outstanding(channel, target, type_).update(
            {'used_at': datetime.utcnow()}
        )
        db.session.commit()

    def discard(self):
        """Expire this code immediately, e.g. when it could not be delivered."""
        self.expires_at = datetime.utcnow()
        db.session.commit()

    @property
    def is_expired(self):
        return datetime.utcnow() > self.expires_at

    def __repr__(self):
        return f'<VerificationCode {self.channel}:{self.type}>'
