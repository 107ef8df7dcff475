"""
Rate limit entry model for DB-backed request throttling.
"""
from datetime import datetime, timedelta
from app import db


class RateLimitEntry(db.Model):
    """One row per throttled action, keyed by caller (usually the client IP)."""
    __tablename__ = 'rate_limit_entries'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(255), nullable=False, index=True)
    endpoint = db.Column(db.String(64), nullable=False, index=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.Index('ix_rate_limit_key_endpoint_ts', 'key', 'endpoint', 'timestamp'),
    )

    @classmethod
    def count_recent(cls, key, endpoint, window_seconds):
        cutoff = datetime.utcnow() - timedelta(seconds=window_seconds)
        return cls.query.filter(
            cls.key == key,
            cls.endpoint == endpoint,
            cls.timestamp > cutoff
        ).count()

    @classmethod
    def add(cls, key, endpoint):
        db.session.add(cls(key=key, endpoint=endpoint, timestamp=datetime.utcnow()))
        db.session.commit()

    @classmethod
    def cleanup_older_than(cls, seconds):
        """Delete entries older than the given number of seconds."""
        cutoff = datetime.utcnow() - timedelta(seconds=seconds)
        count = cls.query.filter(cls.timestamp < cutoff).delete()
        db.session.commit()
        return count

    def __repr__(self):
        return f'<RateLimitEntry {self.key}:{self.endpoint}>'
