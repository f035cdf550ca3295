"""Staff 관리 및 관리자 현황 대시보드 API 라우터입니다."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import require_roles
from app.models.user import User
from app.schemas.attendance import AttendanceRecordOut
from app.schemas.staff import StaffStatusBoardOut
from app.schemas.user import ActiveUpdate, NextDayActiveUpdate, StaffCreate, UserOut
from app.services import attendance_service, staff_service
from app.utils.clock import get_current_date
from app.utils.permissions import MANAGER

router = APIRouter(prefix="/api/staff", tags=["staff"])


@router.get("", response_model=List[UserOut])
def list_staff(
    include_inactive: bool = True,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(MANAGER)),
):
    return staff_service.list_staff(db, include_inactive=include_inactive)


@router.post("", response_model=UserOut)
def create_staff(
    data: StaffCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(MANAGER)),
):
    return staff_service.create_staff(db, data)


@router.get("/status", response_model=StaffStatusBoardOut)
def get_status_board(
    work_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(MANAGER)),
    today: date = Depends(get_current_date),
):
    return staff_service.get_status_board(db, work_date or today)


@router.get("/{staff_id}/history", response_model=List[AttendanceRecordOut])
def get_staff_history(
    staff_id: int,
    limit: int = Query(30, ge=1, le=200),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(MANAGER)),
):
    staff_service.get_staff_or_404(db, staff_id)
    return attendance_service.list_staff_history(db, staff_id, limit)


@router.patch("/{staff_id}/active", response_model=UserOut)
def update_active(
    staff_id: int,
    data: ActiveUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(MANAGER)),
):
    return staff_service.set_active(db, staff_id, data.active)


@router.patch("/{staff_id}/next-day-active", response_model=UserOut)
def update_next_day_active(
    staff_id: int,
    data: NextDayActiveUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(MANAGER)),
):
    return staff_service.set_next_day_active(db, staff_id, data.next_day_active)
