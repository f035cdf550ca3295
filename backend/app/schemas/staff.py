"""관리자용 스태프 현황 대시보드 응답 스키마입니다."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from app.schemas.attendance import AttendanceRecordOut
from app.schemas.report import DailyReportOut
from app.schemas.user import UserOut


class StaffStatusRow(BaseModel):
    user: UserOut
    todayAttendance: Optional[AttendanceRecordOut] = None
    todayReport: Optional[DailyReportOut] = None
    lastLogin: Optional[datetime] = None
    activityScore: int


class StaffStatsOut(BaseModel):
    totalStaff: int
    activeToday: int
    completedReports: int
    activityRate: int


class StaffStatusBoardOut(BaseModel):
    work_date: date
    stats: StaffStatsOut
    staff: list[StaffStatusRow]
