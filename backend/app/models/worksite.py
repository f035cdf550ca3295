"""근무 현장 및 스태프 출근 예정(현장 배정) 조회용 모델 정의입니다."""

from sqlalchemy import Column, Integer, Date, DateTime, String, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Worksite(Base):
    __tablename__ = "worksites"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300))
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())


class StaffAvailability(Base):
    __tablename__ = "staff_availability"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    date = Column(Date, nullable=False)
    worksite_id = Column(Integer, ForeignKey("worksites.id"), nullable=True)
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    worksite = relationship("Worksite")

    __table_args__ = (
        UniqueConstraint("staff_id", "date", name="uq_staff_availability_staff_date"),
    )
