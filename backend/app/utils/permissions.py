"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from app.models.user import User


MANAGER = "manager"
STAFF = "staff"


def is_manager(user: User) -> bool:
    return user.role == MANAGER
