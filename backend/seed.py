"""
Seed script to create a demo account with a few blood pressure records.
Run from backend/: python seed.py
"""
import sys
import os
sys.path.insert(0, os.path.dirname(__file__))

from app import create_app, db
from app.models import Account, BloodPressure

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@triguard.local"
DEMO_PASSWORD = "demo123456"

DEMO_READINGS = [
    ("2024-05-01", "08:00", 128, 82, 72),
    ("2024-05-01", "20:30", 135, 88, 76),
    ("2024-05-02", "08:15", 122, 79, 70),
]


def seed():
    app = create_app()
    with app.app_context():
        db.create_all()

        account = Account.query.filter_by(username=DEMO_USERNAME).first()
        if account:
            print(f"  Demo account already exists (id={account.id}), skipping.")
            return

        account = Account(username=DEMO_USERNAME, email=DEMO_EMAIL)
        account.set_password(DEMO_PASSWORD)
        db.session.add(account)
        db.session.flush()

        for date, time, systolic, diastolic, heart_rate in DEMO_READINGS:
            db.session.add(BloodPressure(
                account_id=account.id, date=date, time=time,
                systolic=systolic, diastolic=diastolic, heart_rate=heart_rate,
            ))
        db.session.commit()
        print(f"  Created demo account (id={account.id}, username={DEMO_USERNAME})")
        print(f"  Added {len(DEMO_READINGS)} blood pressure records.")

        print("\nDone.")


if __name__ == "__main__":
    seed()
