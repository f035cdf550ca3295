"""Attendance Service 도메인 서비스 레이어입니다. 스태프 1인의 일자별 출근 사이클 상태 전이를 담당합니다.

상태: pending → partial → active → complete / reset / archived.
(staff_id, date) 당 pending/partial/active 레코드(현재 사이클)는 최대 1건이며,
나머지는 이력으로 보존되고 물리 삭제하지 않습니다.

새 레코드를 만든 이벤트 응답은 `created=True`를 돌려줍니다. 전날 보고서와의
연결(previous_day_service.link_to_attendance_record)은 여기서 자동으로 수행하지
않으며 호출자가 별도로 요청해야 합니다.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.models.attendance import (
    ACTIVE,
    AttendanceRecord,
    COMPLETE,
    CURRENT_CYCLE_STATUSES,
    PARTIAL,
    PENDING,
    RESET,
)
from app.models.report import ACTIVE_REPORT_STATUSES, DRAFT, DailyReport, REPORT_ARCHIVED, SUBMITTED
from app.models.worksite import StaffAvailability
from app.schemas.attendance import ArrivalIn, DepartureIn, WakeUpIn
from app.services import report_service
from app.utils.clock import parse_timestamp, utc_now
from app.utils.errors import ALREADY_RECORDED, Conflict

logger = logging.getLogger(__name__)


def get_current_record(db: Session, staff_id: int, work_date: date) -> Optional[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.staff_id == staff_id,
            AttendanceRecord.date == work_date,
            AttendanceRecord.status.in_(CURRENT_CYCLE_STATUSES),
        )
        .order_by(AttendanceRecord.created_at.desc(), AttendanceRecord.id.desc())
        .first()
    )


def get_latest_record(
    db: Session, staff_id: int, work_date: date, status: Optional[str] = None
) -> Optional[AttendanceRecord]:
    query = db.query(AttendanceRecord).filter(
        AttendanceRecord.staff_id == staff_id,
        AttendanceRecord.date == work_date,
    )
    if status is not None:
        query = query.filter(AttendanceRecord.status == status)
    return query.order_by(AttendanceRecord.created_at.desc(), AttendanceRecord.id.desc()).first()


def _create_record(db: Session, staff_id: int, work_date: date, status: str, **fields) -> AttendanceRecord:
    record = AttendanceRecord(staff_id=staff_id, date=work_date, status=status, **fields)
    db.add(record)
    return record


def _report_event(
    db: Session,
    staff_id: int,
    work_date: date,
    time_field: str,
    raw_timestamp: Optional[str],
    extra: dict,
    label: str,
) -> dict:
    event_time = parse_timestamp(raw_timestamp, time_field)
    extra = {k: v.strip() for k, v in extra.items() if isinstance(v, str) and v.strip()}

    record = get_current_record(db, staff_id, work_date)
    created = record is None
    if record is None:
        # 완료된 날에는 start_new_day / reopen_day 없이 새 사이클을 열지 않는다.
        latest = get_latest_record(db, staff_id, work_date)
        if latest is not None and latest.status == COMPLETE:
            if getattr(latest, time_field) is not None:
                raise Conflict(f"本日の{label}は既に記録されています", code=ALREADY_RECORDED)
            raise Conflict("本日の業務は既に完了しています。再開するか新しい日を開始してください")
        record = _create_record(db, staff_id, work_date, PARTIAL)
    elif getattr(record, time_field) is not None:
        raise Conflict(f"本日の{label}は既に記録されています", code=ALREADY_RECORDED)

    setattr(record, time_field, event_time)
    for key, value in extra.items():
        setattr(record, key, value)
    record.updated_at = utc_now()

    if record.all_events_reported:
        record.status = COMPLETE
    elif record.status == PENDING:
        record.status = PARTIAL

    db.commit()
    db.refresh(record)
    logger.info(
        "[attendance] %s recorded staff=%s date=%s record=%s status=%s created=%s",
        time_field, staff_id, work_date, record.id, record.status, created,
    )
    return {"message": f"{label}が記録されました", "record": record, "created": created}


def report_wake_up(db: Session, staff_id: int, work_date: date, data: WakeUpIn) -> dict:
    return _report_event(
        db, staff_id, work_date, "wake_up_time", data.timestamp,
        {"wake_up_notes": data.notes},
        "起床時間",
    )


def report_departure(db: Session, staff_id: int, work_date: date, data: DepartureIn) -> dict:
    return _report_event(
        db, staff_id, work_date, "departure_time", data.timestamp,
        {
            "destination": data.destination,
            "route_photo_url": data.route_photo_url,
            "appearance_photo_url": data.appearance_photo_url,
            "departure_notes": data.notes,
        },
        "出発時間",
    )


def report_arrival(db: Session, staff_id: int, work_date: date, data: ArrivalIn) -> dict:
    return _report_event(
        db, staff_id, work_date, "arrival_time", data.timestamp,
        {
            "arrival_location": data.arrival_location,
            "arrival_gps_location": data.arrival_gps_location,
            "arrival_notes": data.notes,
        },
        "到着時間",
    )


def complete_day(db: Session, staff_id: int, work_date: date) -> dict:
    record = get_current_record(db, staff_id, work_date)
    if record is not None:
        record.status = COMPLETE
        record.updated_at = utc_now()
        db.commit()
    else:
        latest = get_latest_record(db, staff_id, work_date)
        if latest is not None and latest.status == COMPLETE:
            record = latest
        else:
            record = _create_record(db, staff_id, work_date, COMPLETE)
            db.commit()
    db.refresh(record)
    logger.info("[attendance] day completed staff=%s date=%s record=%s", staff_id, work_date, record.id)

    report_service.transition_reports(
        db, staff_id, work_date, (DRAFT,),
        {DailyReport.status: SUBMITTED, DailyReport.submitted_at: utc_now()},
    )
    return {
        "success": True,
        "message": "本日の業務を完了しました。お疲れ様でした！",
        "date": work_date,
        "record": record,
    }


def reopen_day(db: Session, staff_id: int, work_date: date) -> dict:
    latest = get_latest_record(db, staff_id, work_date)
    can_reopen = (
        latest is not None
        and latest.status == COMPLETE
        and get_current_record(db, staff_id, work_date) is None
    )
    if not can_reopen:
        return {
            "success": True,
            "message": "再開できる完了済みの記録がありません",
            "reopenedDate": work_date,
            "reopened": False,
        }

    latest.status = ACTIVE
    latest.updated_at = utc_now()
    db.commit()
    db.refresh(latest)
    logger.info("[attendance] day reopened staff=%s date=%s record=%s", staff_id, work_date, latest.id)

    report_service.transition_reports(
        db, staff_id, work_date, (SUBMITTED,),
        {DailyReport.status: DRAFT, DailyReport.submitted_at: None},
    )
    return {
        "success": True,
        "message": "業務を再開しました",
        "reopenedDate": work_date,
        "reopened": True,
        "record": latest,
    }


def start_new_day(db: Session, staff_id: int, work_date: date) -> dict:
    if get_current_record(db, staff_id, work_date) is not None:
        return {
            "success": True,
            "message": "本日の記録は既にアクティブです",
            "date": work_date,
            "alreadyActive": True,
        }

    latest = get_latest_record(db, staff_id, work_date)
    was_completed = latest is not None and latest.status == COMPLETE
    if was_completed:
        latest.status = RESET
        latest.updated_at = utc_now()
    record = _create_record(db, staff_id, work_date, ACTIVE)
    db.commit()
    db.refresh(record)
    logger.info(
        "[attendance] new day started staff=%s date=%s record=%s reset_previous=%s",
        staff_id, work_date, record.id, was_completed,
    )

    if was_completed:
        # 완료된 하루를 다시 시작할 때도 보고서는 삭제하지 않고 보관 처리한다.
        report_service.transition_reports(
            db, staff_id, work_date, ACTIVE_REPORT_STATUSES,
            {DailyReport.status: REPORT_ARCHIVED},
        )
    return {
        "success": True,
        "message": "新しい日を開始しました！本日もお疲れ様です。",
        "date": work_date,
        "reset": was_completed,
        "record": record,
    }


def reset_for_new_day(db: Session, staff_id: int, work_date: date) -> dict:
    if get_current_record(db, staff_id, work_date) is not None:
        return {
            "success": True,
            "message": "本日の記録は既にアクティブです",
            "date": work_date,
            "alreadyActive": True,
        }

    latest = get_latest_record(db, staff_id, work_date)
    if latest is not None and latest.status == COMPLETE:
        return {
            "success": True,
            "message": "本日の業務は既に完了しています",
            "date": work_date,
            "alreadyCompleted": True,
        }

    record = _create_record(db, staff_id, work_date, PENDING)
    db.commit()
    db.refresh(record)
    logger.info("[attendance] prepared new day staff=%s date=%s record=%s", staff_id, work_date, record.id)
    return {
        "success": True,
        "message": "新しい日の準備が完了しました",
        "date": work_date,
        "record": record,
    }


def get_availability(db: Session, staff_id: int, work_date: date) -> Optional[StaffAvailability]:
    return (
        db.query(StaffAvailability)
        .filter(StaffAvailability.staff_id == staff_id, StaffAvailability.date == work_date)
        .first()
    )


def get_display_record(db: Session, staff_id: int, today: date) -> tuple[Optional[AttendanceRecord], date]:
    """Record shown on the staff dashboard and the date it belongs to.

    Today's current cycle, else today's latest completed record, else an
    unfinished cycle left over from yesterday.
    """
    record = get_current_record(db, staff_id, today) or get_latest_record(db, staff_id, today, COMPLETE)
    if record is not None:
        return record, today
    yesterday = today - timedelta(days=1)
    leftover = get_current_record(db, staff_id, yesterday)
    if leftover is not None:
        return leftover, yesterday
    return None, today


def get_status(db: Session, staff_id: int, today: date) -> dict:
    record, display_date = get_display_record(db, staff_id, today)
    report = report_service.get_active_report(db, staff_id, display_date)
    availability = get_availability(db, staff_id, display_date)

    status = {
        "wakeUpReported": bool(record and record.wake_up_time),
        "departureReported": bool(record and record.departure_time),
        "arrivalReported": bool(record and record.arrival_time),
        "dailyReportSubmitted": report is not None,
        "shiftScheduleSubmitted": availability is not None,
        "dayCompleted": bool(record and record.status == COMPLETE),
    }
    logger.debug("[attendance] status staff=%s date=%s %s", staff_id, display_date, status)
    return {
        "status": status,
        "attendanceRecord": record,
        "dailyReport": report,
        "shiftSchedule": availability,
        "date": display_date,
        "isToday": display_date == today,
        "isShowingPreviousDay": display_date != today,
    }


def get_today_worksite(db: Session, staff_id: int, today: date) -> dict:
    availability = get_availability(db, staff_id, today)
    if availability is None or availability.worksite_id is None:
        return {
            "hasWorksite": False,
            "worksite": None,
            "message": "本日の勤務予定現場が設定されていません",
        }
    return {
        "hasWorksite": True,
        "worksite": availability.worksite,
        "availability": availability,
    }


def list_staff_history(db: Session, staff_id: int, limit: int = 30) -> list[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.staff_id == staff_id)
        .order_by(AttendanceRecord.date.desc(), AttendanceRecord.created_at.desc(), AttendanceRecord.id.desc())
        .limit(limit)
        .all()
    )
