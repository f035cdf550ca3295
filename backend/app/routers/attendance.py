"""출근 사이클(기상/출발/도착, 업무 완료/재개/새 날 시작) 및 전날 보고서 API 라우터입니다."""

from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from app.schemas.attendance import (
    ArrivalIn,
    AttendanceEventOut,
    DayActionOut,
    DepartureIn,
    TodayWorksiteOut,
    WakeUpIn,
)
from app.schemas.report import (
    AttendanceStatusOut,
    LinkPreviousDayIn,
    LinkPreviousDayOut,
    LinkStatusOut,
    PreviousDayGetOut,
    PreviousDayReportIn,
    PreviousDaySubmitOut,
)
from app.services import attendance_service, previous_day_service
from app.utils.clock import get_current_date

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.post("/wake-up", response_model=AttendanceEventOut)
@router.post("/wakeup", response_model=AttendanceEventOut, include_in_schema=False)
def report_wake_up(
    data: WakeUpIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.report_wake_up(db, current_user.user_id, today, data)


@router.post("/departure", response_model=AttendanceEventOut)
def report_departure(
    data: DepartureIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.report_departure(db, current_user.user_id, today, data)


@router.post("/arrival", response_model=AttendanceEventOut)
def report_arrival(
    data: ArrivalIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.report_arrival(db, current_user.user_id, today, data)


@router.post("/complete-day", response_model=DayActionOut, response_model_exclude_none=True)
def complete_day(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.complete_day(db, current_user.user_id, today)


@router.post("/reopen-day", response_model=DayActionOut, response_model_exclude_none=True)
def reopen_day(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.reopen_day(db, current_user.user_id, today)


@router.post("/start-new-day", response_model=DayActionOut, response_model_exclude_none=True)
def start_new_day(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.start_new_day(db, current_user.user_id, today)


@router.post("/reset-for-new-day", response_model=DayActionOut, response_model_exclude_none=True)
def reset_for_new_day(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.reset_for_new_day(db, current_user.user_id, today)


@router.get("/status", response_model=AttendanceStatusOut)
def get_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.get_status(db, current_user.user_id, today)


@router.get("/today-worksite", response_model=TodayWorksiteOut)
def get_today_worksite(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return attendance_service.get_today_worksite(db, current_user.user_id, today)


@router.post("/previous-day", response_model=PreviousDaySubmitOut)
def submit_previous_day_report(
    data: PreviousDayReportIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    report = previous_day_service.submit_previous_day_report(db, current_user.user_id, today, data)
    return {"message": "前日報告が正常に送信されました", "data": report}


@router.get("/previous-day", response_model=PreviousDayGetOut)
def get_previous_day_report(
    report_date: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    target_date = report_date or today + timedelta(days=1)
    report = previous_day_service.get_previous_day_report(db, current_user.user_id, target_date)
    return {"report": report, "hasReport": report is not None}


@router.post("/link-previous-day", response_model=LinkPreviousDayOut)
def link_previous_day(
    data: LinkPreviousDayIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return previous_day_service.link_to_attendance_record(db, current_user.user_id, data)


@router.get("/link-previous-day", response_model=LinkStatusOut)
def get_link_status(
    report_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return previous_day_service.get_link_status(db, current_user.user_id, report_date)
