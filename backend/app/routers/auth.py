"""Auth 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import LoginRequest, ProfileOut, ProfileUpdate, TokenResponse, UserOut
from app.services import auth_service
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from app.utils.helpers import get_client_ip

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    user = auth_service.mock_sso_login(db, payload.email)
    auth_service.log_user_access(db, user.user_id, get_client_ip(request), request.headers.get("User-Agent"))
    token = auth_service.create_access_token(user.user_id)
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/logout")
def logout(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    auth_service.log_user_logout(db, current_user.user_id)
    return {"message": "ログアウトしました"}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("/profile", response_model=ProfileOut)
def get_profile(current_user: User = Depends(get_current_user)):
    return {"user": current_user}


@router.put("/profile", response_model=ProfileOut)
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = auth_service.update_profile(db, current_user, data)
    return {"message": "プロフィールを更新しました", "user": user}
