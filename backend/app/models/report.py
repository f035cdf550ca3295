"""일일 보고서 및 전날(익일 계획) 보고서 모델 정의입니다."""

from sqlalchemy import Column, Integer, Date, DateTime, String, Text, Float, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


DRAFT = "draft"
SUBMITTED = "submitted"
SUPERSEDED = "superseded"
REPORT_ARCHIVED = "archived"

ACTIVE_REPORT_STATUSES = (DRAFT, SUBMITTED)


class DailyReport(Base):
    __tablename__ = "daily_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    attendance_record_id = Column(Integer, ForeignKey("attendance_records.id"), nullable=True)
    date = Column(Date, nullable=False)
    content = Column(Text, nullable=False)
    work_hours = Column(Float, nullable=True)
    achievements = Column(Text, nullable=True)
    challenges = Column(Text, nullable=True)
    tomorrow_plan = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=DRAFT)
    submitted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    staff = relationship("User", back_populates="daily_reports")
    attendance_record = relationship("AttendanceRecord")

    __table_args__ = (
        Index("ix_daily_reports_staff_date", "staff_id", "date"),
    )


class PreviousDayReport(Base):
    __tablename__ = "previous_day_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    # 계획 대상일 (제출 시점 JST 기준 내일)
    report_date = Column(Date, nullable=False)
    next_wake_up_time = Column(String(40), nullable=False)
    next_departure_time = Column(String(40), nullable=False)
    next_arrival_time = Column(String(40), nullable=False)
    appearance_photo_url = Column(String(500), nullable=False)
    route_photo_url = Column(String(500), nullable=False)
    notes = Column(Text, nullable=True)
    actual_attendance_record_id = Column(
        Integer, ForeignKey("attendance_records.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User")
    actual_attendance_record = relationship("AttendanceRecord")

    __table_args__ = (
        Index("ix_previous_day_reports_user_date", "user_id", "report_date"),
    )
