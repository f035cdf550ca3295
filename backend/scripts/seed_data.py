"""Seed the database with development data."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import timedelta
from app.config import settings
from app.database import SessionLocal, engine, Base
import app.models  # noqa: F401

from app.models.user import User
from app.models.worksite import Worksite, StaffAvailability
from app.utils.clock import current_date


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            User(email="manager@example.com", name="管理者 山田太郎", role="manager"),
            User(email="staff1@example.com", name="佐藤花子", role="staff", phone="090-0000-0001"),
            User(email="staff2@example.com", name="鈴木一郎", role="staff", phone="090-0000-0002"),
        ]
        db.add_all(users)
        db.flush()

        worksites = [
            Worksite(name="新宿現場", address="東京都新宿区西新宿2-8-1", description="オフィスビル改修"),
            Worksite(name="横浜現場", address="神奈川県横浜市中区本町6-50", description="店舗内装"),
        ]
        db.add_all(worksites)
        db.flush()

        today = current_date(settings.APP_TIMEZONE)
        availability = []
        for offset in range(7):
            work_date = today + timedelta(days=offset)
            for idx, staff in enumerate(users[1:]):
                availability.append(StaffAvailability(
                    staff_id=staff.user_id,
                    date=work_date,
                    worksite_id=worksites[(idx + offset) % len(worksites)].id,
                ))
        db.add_all(availability)

        db.commit()
        print("Seed data inserted successfully.")
        print(f"  Users: {len(users)}")
        print(f"  Worksites: {len(worksites)}")
        print(f"  Availability rows: {len(availability)}")
        print()
        print("Test login credentials:")
        for u in users:
            print(f"  email={u.email}  role={u.role}  name={u.name}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    seed()
