"""일자 단위 출근 사이클(기상/출발/도착) 기록 모델 정의입니다."""

from sqlalchemy import Column, Integer, Date, DateTime, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


PENDING = "pending"
PARTIAL = "partial"
ACTIVE = "active"
COMPLETE = "complete"
RESET = "reset"
ARCHIVED = "archived"

# (staff_id, date) 당 최대 1건만 이 상태 중 하나를 가진다.
CURRENT_CYCLE_STATUSES = (PENDING, PARTIAL, ACTIVE)
ATTENDANCE_STATUSES = (PENDING, PARTIAL, ACTIVE, COMPLETE, RESET, ARCHIVED)


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    date = Column(Date, nullable=False)

    wake_up_time = Column(DateTime, nullable=True)
    wake_up_notes = Column(Text, nullable=True)

    departure_time = Column(DateTime, nullable=True)
    departure_notes = Column(Text, nullable=True)
    destination = Column(String(200), nullable=True)
    route_photo_url = Column(String(500), nullable=True)
    appearance_photo_url = Column(String(500), nullable=True)

    arrival_time = Column(DateTime, nullable=True)
    arrival_location = Column(String(200), nullable=True)
    arrival_gps_location = Column(String(100), nullable=True)
    arrival_notes = Column(Text, nullable=True)

    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=PENDING)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    staff = relationship("User", back_populates="attendance_records")

    __table_args__ = (
        Index("ix_attendance_records_staff_date", "staff_id", "date"),
    )

    @property
    def all_events_reported(self) -> bool:
        return bool(self.wake_up_time and self.departure_time and self.arrival_time)
