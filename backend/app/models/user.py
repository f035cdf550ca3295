"""User 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    phone = Column(String(30))
    role = Column(String(20), nullable=False)  # manager/staff
    is_active = Column(Boolean, default=True)
    next_day_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    attendance_records = relationship("AttendanceRecord", back_populates="staff")
    daily_reports = relationship("DailyReport", back_populates="staff")
    access_logs = relationship("AccessLog", back_populates="user")
