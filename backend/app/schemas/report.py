"""일일 보고서 / 전날 보고서 요청·응답 스키마입니다."""

from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.attendance import AttendanceRecordOut, AttendanceStatusFlags, StaffAvailabilityOut


class DailyReportIn(BaseModel):
    content: Optional[str] = None
    workHours: Optional[float] = Field(None, validation_alias=AliasChoices("workHours", "work_hours"))
    achievements: Optional[str] = None
    challenges: Optional[str] = None
    tomorrow: Optional[str] = Field(None, validation_alias=AliasChoices("tomorrow", "tomorrow_plan"))


class DailyReportOut(BaseModel):
    id: int
    staff_id: int
    attendance_record_id: Optional[int] = None
    date: date
    content: str
    work_hours: Optional[float] = None
    achievements: Optional[str] = None
    challenges: Optional[str] = None
    tomorrow_plan: Optional[str] = None
    status: str
    submitted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DailyReportSubmitOut(BaseModel):
    message: str
    reportId: int


class DailyReportGetOut(BaseModel):
    report: Optional[DailyReportOut] = None


class PreviousDayReportIn(BaseModel):
    next_wake_up_time: Optional[str] = None
    next_departure_time: Optional[str] = None
    next_arrival_time: Optional[str] = None
    appearance_photo_url: Optional[str] = None
    route_photo_url: Optional[str] = None
    notes: Optional[str] = None


class PreviousDayReportOut(BaseModel):
    id: int
    user_id: int
    report_date: date
    next_wake_up_time: str
    next_departure_time: str
    next_arrival_time: str
    appearance_photo_url: str
    route_photo_url: str
    notes: Optional[str] = None
    actual_attendance_record_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PreviousDaySubmitOut(BaseModel):
    message: str
    data: PreviousDayReportOut


class PreviousDayGetOut(BaseModel):
    report: Optional[PreviousDayReportOut] = None
    hasReport: bool


class LinkPreviousDayIn(BaseModel):
    attendance_record_id: Optional[int] = None
    report_date: Optional[date] = None


class LinkPreviousDayOut(BaseModel):
    message: str
    linked: bool
    alreadyLinked: bool
    previous_day_report_id: int
    attendance_record_id: int
    data: Optional[PreviousDayReportOut] = None


class LinkStatusOut(BaseModel):
    report: Optional[PreviousDayReportOut] = None
    hasReport: bool
    isLinked: bool
    attendanceRecord: Optional[AttendanceRecordOut] = None


class AttendanceStatusOut(BaseModel):
    status: AttendanceStatusFlags
    attendanceRecord: Optional[AttendanceRecordOut] = None
    dailyReport: Optional[DailyReportOut] = None
    shiftSchedule: Optional[StaffAvailabilityOut] = None
    date: date
    isToday: bool
    isShowingPreviousDay: bool

