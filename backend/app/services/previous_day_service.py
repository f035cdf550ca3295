"""Previous Day 보고서 서비스 레이어입니다. 익일 계획 제출 시 사이클 초기화와 실제 출근 기록 연결을 담당합니다."""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.attendance import ARCHIVED, AttendanceRecord
from app.models.report import ACTIVE_REPORT_STATUSES, DailyReport, PreviousDayReport, REPORT_ARCHIVED
from app.schemas.report import LinkPreviousDayIn, PreviousDayReportIn
from app.services import attendance_service, report_service
from app.utils.clock import utc_now
from app.utils.errors import MISSING_FIELD, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

PLANNED_TIME_FIELDS = ("next_wake_up_time", "next_departure_time", "next_arrival_time")
PHOTO_FIELDS = ("appearance_photo_url", "route_photo_url")


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _archive_current_cycle(db: Session, user_id: int, today: date) -> None:
    try:
        record = attendance_service.get_current_record(db, user_id, today)
        if record is None:
            return
        record.status = ARCHIVED
        record.updated_at = utc_now()
        db.commit()
        logger.info("[previous-day] archived attendance record=%s date=%s", record.id, today)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("[previous-day] attendance archive skipped for user=%s date=%s: %s", user_id, today, exc)


def submit_previous_day_report(
    db: Session, user_id: int, today: date, data: PreviousDayReportIn
) -> PreviousDayReport:
    if any(_blank(getattr(data, field)) for field in PLANNED_TIME_FIELDS):
        raise ValidationFailed("翌日の予定時間をすべて入力してください", code=MISSING_FIELD)
    if any(_blank(getattr(data, field)) for field in PHOTO_FIELDS):
        raise ValidationFailed("身だしなみ写真と経路スクリーンショットをアップロードしてください", code=MISSING_FIELD)

    # 새 계획 제출은 오늘 사이클을 새로 시작한다는 의미이므로 기존 기록은 보관 처리한다.
    _archive_current_cycle(db, user_id, today)
    report_service.transition_reports(
        db, user_id, today, ACTIVE_REPORT_STATUSES, {DailyReport.status: REPORT_ARCHIVED}
    )

    report = PreviousDayReport(
        user_id=user_id,
        report_date=today + timedelta(days=1),
        next_wake_up_time=data.next_wake_up_time.strip(),
        next_departure_time=data.next_departure_time.strip(),
        next_arrival_time=data.next_arrival_time.strip(),
        appearance_photo_url=data.appearance_photo_url.strip(),
        route_photo_url=data.route_photo_url.strip(),
        notes=data.notes.strip() if data.notes and data.notes.strip() else None,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info(
        "[previous-day] report=%s submitted user=%s for report_date=%s",
        report.id, user_id, report.report_date,
    )
    return report


def get_previous_day_report(db: Session, user_id: int, report_date: date) -> Optional[PreviousDayReport]:
    return (
        db.query(PreviousDayReport)
        .filter(PreviousDayReport.user_id == user_id, PreviousDayReport.report_date == report_date)
        .order_by(PreviousDayReport.created_at.desc(), PreviousDayReport.id.desc())
        .first()
    )


def link_to_attendance_record(db: Session, user_id: int, data: LinkPreviousDayIn) -> dict:
    if data.attendance_record_id is None:
        raise ValidationFailed("出勤記録IDが必要です", code=MISSING_FIELD)

    record = (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.id == data.attendance_record_id, AttendanceRecord.staff_id == user_id)
        .first()
    )
    if record is None:
        raise NotFound("出勤記録が見つかりません")

    lookup_date = data.report_date or (record.date - timedelta(days=1))
    report = get_previous_day_report(db, user_id, lookup_date)
    if report is None:
        raise NotFound("対応する前日報告が見つかりません")

    if report.actual_attendance_record_id is not None:
        return {
            "message": "既にリンクされています",
            "linked": True,
            "alreadyLinked": True,
            "previous_day_report_id": report.id,
            "attendance_record_id": record.id,
            "data": report,
        }

    report.actual_attendance_record_id = record.id
    report.updated_at = utc_now()
    db.commit()
    db.refresh(report)
    logger.info("[previous-day] report=%s linked to attendance record=%s", report.id, record.id)
    return {
        "message": "前日報告と出勤記録が正常にリンクされました",
        "linked": True,
        "alreadyLinked": False,
        "previous_day_report_id": report.id,
        "attendance_record_id": record.id,
        "data": report,
    }


def get_link_status(db: Session, user_id: int, report_date: date) -> dict:
    report = get_previous_day_report(db, user_id, report_date)
    return {
        "report": report,
        "hasReport": report is not None,
        "isLinked": bool(report and report.actual_attendance_record_id),
        "attendanceRecord": report.actual_attendance_record if report else None,
    }
