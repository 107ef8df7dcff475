"""
Blood pressure record model.
"""
from datetime import datetime
from app import db


class BloodPressure(db.Model):
    """
    A single blood pressure measurement owned by one account.
    `date` and `time` are kept as the strings the client submitted
    (YYYY-MM-DD / HH:MM) so that day lookups are plain equality filters.
    """
    __tablename__ = 'blood_pressures'

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False, index=True)

    systolic = db.Column(db.Integer, nullable=False)
    diastolic = db.Column(db.Integer, nullable=False)
    heart_rate = db.Column(db.Integer, nullable=True)

    date = db.Column(db.String(10), nullable=False, index=True)
    time = db.Column(db.String(5), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.Index('ix_blood_pressures_account_date', 'account_id', 'date'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'account_id': self.account_id,
            'systolic': self.systolic,
            'diastolic': self.diastolic,
            'heart_rate': self.heart_rate,
            'date': self.date,
            'time': self.time,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<BloodPressure {self.id}: {self.systolic}/{self.diastolic}>'
