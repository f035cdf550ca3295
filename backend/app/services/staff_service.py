"""Staff Service 도메인 서비스 레이어입니다. 관리자용 스태프 관리와 당일 현황 집계를 담당합니다."""

import re
from datetime import date

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.access_log import AccessLog
from app.models.report import SUBMITTED
from app.models.user import User
from app.schemas.user import StaffCreate
from app.services import attendance_service, report_service
from app.utils.permissions import STAFF

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def list_staff(db: Session, include_inactive: bool = True) -> list[User]:
    query = db.query(User).filter(User.role == STAFF)
    if not include_inactive:
        query = query.filter(User.is_active == True)
    return query.order_by(User.name.asc()).all()


def get_staff_or_404(db: Session, staff_id: int) -> User:
    user = db.query(User).filter(User.user_id == staff_id, User.role == STAFF).first()
    if not user:
        raise HTTPException(status_code=404, detail="スタッフが見つかりません")
    return user


def create_staff(db: Session, data: StaffCreate) -> User:
    email = data.email.strip().lower()
    name = data.name.strip()
    if not EMAIL_PATTERN.match(email):
        raise HTTPException(status_code=400, detail="メールアドレスの形式が正しくありません")
    if len(name) < 2:
        raise HTTPException(status_code=400, detail="名前は2文字以上で入力してください")
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="このメールアドレスは既に使用されています")

    user = User(email=email, name=name, phone=(data.phone or "").strip() or None, role=STAFF)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def set_active(db: Session, staff_id: int, active: bool) -> User:
    user = get_staff_or_404(db, staff_id)
    user.is_active = active
    db.commit()
    db.refresh(user)
    return user


def set_next_day_active(db: Session, staff_id: int, next_day_active: bool) -> User:
    user = get_staff_or_404(db, staff_id)
    user.next_day_active = next_day_active
    db.commit()
    db.refresh(user)
    return user


def _activity_score(record, report) -> int:
    score = 0
    if record is not None:
        score += sum(1 for value in (record.wake_up_time, record.departure_time, record.arrival_time) if value)
    if report is not None:
        score += 1
    return score


def get_status_board(db: Session, work_date: date) -> dict:
    staff = list_staff(db, include_inactive=False)
    last_logins = dict(
        db.query(AccessLog.user_id, func.max(AccessLog.login_time))
        .group_by(AccessLog.user_id)
        .all()
    )

    rows = []
    for member in staff:
        record = (
            attendance_service.get_current_record(db, member.user_id, work_date)
            or attendance_service.get_latest_record(db, member.user_id, work_date)
        )
        report = report_service.get_active_report(db, member.user_id, work_date)
        rows.append({
            "user": member,
            "todayAttendance": record,
            "todayReport": report,
            "lastLogin": last_logins.get(member.user_id),
            "activityScore": _activity_score(record, report),
        })

    rows.sort(key=lambda row: (-row["activityScore"], row["user"].name))
    total = len(rows)
    active_today = sum(1 for row in rows if row["todayAttendance"] is not None or row["todayReport"] is not None)
    completed_reports = sum(
        1 for row in rows if row["todayReport"] is not None and row["todayReport"].status == SUBMITTED
    )
    return {
        "work_date": work_date,
        "stats": {
            "totalStaff": total,
            "activeToday": active_today,
            "completedReports": completed_reports,
            "activityRate": round(active_today * 100 / total) if total else 0,
        },
        "staff": rows,
    }
