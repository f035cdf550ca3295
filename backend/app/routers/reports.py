"""일일 보고서 API 라우터입니다."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from app.schemas.report import DailyReportGetOut, DailyReportIn, DailyReportOut, DailyReportSubmitOut
from app.services import report_service
from app.utils.clock import get_current_date
from app.utils.permissions import is_manager

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.post("/daily", response_model=DailyReportSubmitOut)
def submit_daily_report(
    data: DailyReportIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    report = report_service.submit_report(db, current_user.user_id, today, data)
    return {"message": "日報を提出しました", "reportId": report.id}


@router.get("/daily", response_model=DailyReportGetOut)
def get_daily_report(
    report_date: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_current_date),
):
    return {"report": report_service.get_active_report(db, current_user.user_id, report_date or today)}


@router.get("/daily/history", response_model=List[DailyReportOut])
def list_daily_report_history(
    staff_id: Optional[int] = Query(None),
    limit: int = Query(30, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    target_id = current_user.user_id
    if staff_id is not None and staff_id != current_user.user_id:
        if not is_manager(current_user):
            raise HTTPException(status_code=403, detail="管理者権限が必要です")
        target_id = staff_id
    return report_service.list_report_history(db, target_id, limit)
