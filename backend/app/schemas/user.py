"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, StrictBool
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    email: str
    name: str
    phone: Optional[str] = None
    role: str


class UserOut(UserBase):
    user_id: int
    is_active: bool
    next_day_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class StaffCreate(BaseModel):
    email: str
    name: str
    phone: Optional[str] = None


class ActiveUpdate(BaseModel):
    active: StrictBool


class NextDayActiveUpdate(BaseModel):
    next_day_active: StrictBool


class LoginRequest(BaseModel):
    email: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class ProfileOut(BaseModel):
    message: Optional[str] = None
    user: UserOut
