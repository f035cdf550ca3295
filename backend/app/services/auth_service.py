"""Auth Service 도메인 서비스 레이어입니다. 토큰 발급과 접근 이력(access_logs) 기록을 담당합니다."""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from app.models.access_log import AccessLog
from app.models.user import User
from app.schemas.user import ProfileUpdate
from app.config import settings
from app.utils.errors import MISSING_FIELD, ValidationFailed

ALGORITHM = "HS256"
PHONE_PATTERN = re.compile(r"^[\d\-+().\s]+$")

logger = logging.getLogger(__name__)


def create_access_token(user_id: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def mock_sso_login(db: Session, email: str) -> User:
    normalized = (email or "").strip().lower()
    user = db.query(User).filter(User.email == normalized, User.is_active == True).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"'{email}' に該当する有効なユーザーが見つかりません",
        )
    return user


def log_user_access(db: Session, user_id: int, ip_address: Optional[str], user_agent: Optional[str]) -> None:
    try:
        db.add(AccessLog(
            user_id=user_id,
            login_time=datetime.now(timezone.utc),
            ip_address=ip_address,
            user_agent=(user_agent or "")[:500] or None,
        ))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("[auth] access log skipped for user=%s: %s", user_id, exc)


def log_user_logout(db: Session, user_id: int) -> None:
    recent = (
        db.query(AccessLog)
        .filter(AccessLog.user_id == user_id, AccessLog.logout_time == None)
        .order_by(AccessLog.login_time.desc(), AccessLog.id.desc())
        .first()
    )
    if recent is None:
        return
    try:
        recent.logout_time = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("[auth] logout time not recorded for user=%s: %s", user_id, exc)


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    name = (data.name or "").strip()
    if not name:
        raise ValidationFailed("名前は必須です", code=MISSING_FIELD)
    if len(name) < 2:
        raise ValidationFailed("名前は2文字以上で入力してください")
    phone = (data.phone or "").strip()
    if phone and not PHONE_PATTERN.match(phone):
        raise ValidationFailed("電話番号の形式が正しくありません")

    user.name = name
    if phone:
        user.phone = phone
    db.commit()
    db.refresh(user)
    logger.info("[auth] profile updated user=%s", user.user_id)
    return user
