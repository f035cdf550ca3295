"""Daily Report 도메인 서비스 레이어입니다. 일자별 활성 보고서 1건 규칙과 출근 사이클 연동을 담당합니다."""

import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.attendance import AttendanceRecord, COMPLETE, CURRENT_CYCLE_STATUSES
from app.models.report import ACTIVE_REPORT_STATUSES, DailyReport, SUBMITTED, SUPERSEDED
from app.schemas.report import DailyReportIn
from app.utils.clock import utc_now
from app.utils.errors import MISSING_FIELD, ValidationFailed

logger = logging.getLogger(__name__)


def get_active_report(db: Session, staff_id: int, report_date: date) -> Optional[DailyReport]:
    return (
        db.query(DailyReport)
        .filter(
            DailyReport.staff_id == staff_id,
            DailyReport.date == report_date,
            DailyReport.status.in_(ACTIVE_REPORT_STATUSES),
        )
        .order_by(DailyReport.created_at.desc(), DailyReport.id.desc())
        .first()
    )


def list_report_history(db: Session, staff_id: int, limit: int = 30) -> list[DailyReport]:
    return (
        db.query(DailyReport)
        .filter(DailyReport.staff_id == staff_id)
        .order_by(DailyReport.date.desc(), DailyReport.created_at.desc(), DailyReport.id.desc())
        .limit(limit)
        .all()
    )


def transition_reports(
    db: Session,
    staff_id: int,
    report_date: date,
    from_statuses: Iterable[str],
    values: dict,
) -> int:
    """Best-effort bulk status change for one staff member's reports on a date.

    Failures are logged and rolled back; the caller's primary write is never undone.
    """
    try:
        count = (
            db.query(DailyReport)
            .filter(
                DailyReport.staff_id == staff_id,
                DailyReport.date == report_date,
                DailyReport.status.in_(tuple(from_statuses)),
            )
            .update({**values, DailyReport.updated_at: utc_now()}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning(
            "[report] status transition to %s skipped for staff=%s date=%s: %s",
            values.get(DailyReport.status), staff_id, report_date, exc,
        )
        return 0
    if count:
        logger.info(
            "[report] %d report(s) -> %s for staff=%s date=%s",
            count, values.get(DailyReport.status), staff_id, report_date,
        )
    return count


def _current_attendance_record(db: Session, staff_id: int, report_date: date) -> Optional[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.staff_id == staff_id,
            AttendanceRecord.date == report_date,
            AttendanceRecord.status.in_(CURRENT_CYCLE_STATUSES),
        )
        .order_by(AttendanceRecord.created_at.desc(), AttendanceRecord.id.desc())
        .first()
    )


def submit_report(db: Session, staff_id: int, report_date: date, data: DailyReportIn) -> DailyReport:
    content = (data.content or "").strip()
    if not content:
        raise ValidationFailed("業務内容は必須です", code=MISSING_FIELD)

    now = utc_now()
    superseded = (
        db.query(DailyReport)
        .filter(
            DailyReport.staff_id == staff_id,
            DailyReport.date == report_date,
            DailyReport.status.in_(ACTIVE_REPORT_STATUSES),
        )
        .update({DailyReport.status: SUPERSEDED, DailyReport.updated_at: now}, synchronize_session=False)
    )

    attendance = _current_attendance_record(db, staff_id, report_date)
    report = DailyReport(
        staff_id=staff_id,
        attendance_record_id=attendance.id if attendance else None,
        date=report_date,
        content=content,
        work_hours=data.workHours,
        achievements=data.achievements,
        challenges=data.challenges,
        tomorrow_plan=data.tomorrow,
        status=SUBMITTED,
        submitted_at=now,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info(
        "[report] submitted report=%s staff=%s date=%s (superseded=%d)",
        report.id, staff_id, report_date, superseded,
    )

    # 보고서 제출 후 기상/출발/도착이 모두 기록되어 있으면 사이클을 완료 처리한다.
    if attendance is not None and attendance.all_events_reported:
        try:
            attendance.status = COMPLETE
            attendance.updated_at = utc_now()
            db.commit()
            logger.info("[report] attendance record=%s auto-completed", attendance.id)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("[report] auto-complete skipped for record=%s: %s", attendance.id, exc)
    return report
