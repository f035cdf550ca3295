"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from app.models.user import User
from app.models.attendance import AttendanceRecord
from app.models.report import DailyReport, PreviousDayReport
from app.models.worksite import Worksite, StaffAvailability
from app.models.access_log import AccessLog

__all__ = [
    "User",
    "AttendanceRecord",
    "DailyReport", "PreviousDayReport",
    "Worksite", "StaffAvailability",
    "AccessLog",
]
