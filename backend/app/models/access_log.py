"""로그인/로그아웃 접근 이력 모델 정의입니다."""

from sqlalchemy import Column, Integer, DateTime, String, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class AccessLog(Base):
    __tablename__ = "access_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    login_time = Column(DateTime, nullable=False)
    logout_time = Column(DateTime, nullable=True)
    ip_address = Column(String(64))
    user_agent = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="access_logs")
