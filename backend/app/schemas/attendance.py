"""출근 사이클 요청/응답 스키마입니다."""

import datetime as _dt
from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class AttendanceRecordOut(BaseModel):
    id: int
    staff_id: int
    date: date
    wake_up_time: Optional[datetime] = None
    wake_up_notes: Optional[str] = None
    departure_time: Optional[datetime] = None
    departure_notes: Optional[str] = None
    destination: Optional[str] = None
    route_photo_url: Optional[str] = None
    appearance_photo_url: Optional[str] = None
    arrival_time: Optional[datetime] = None
    arrival_location: Optional[str] = None
    arrival_gps_location: Optional[str] = None
    arrival_notes: Optional[str] = None
    notes: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# 시각 필드는 형식 오류를 INVALID_TIME_FORMAT(400)으로 돌려주기 위해 문자열로 받는다.
class WakeUpIn(BaseModel):
    timestamp: Optional[str] = Field(None, validation_alias=AliasChoices("timestamp", "wake_up_time"))
    notes: Optional[str] = None


class DepartureIn(BaseModel):
    timestamp: Optional[str] = Field(None, validation_alias=AliasChoices("timestamp", "departure_time"))
    destination: Optional[str] = None
    route_photo_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("route_photo_url", "routePhotoUrl", "photoUrl")
    )
    appearance_photo_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("appearance_photo_url", "appearancePhotoUrl")
    )
    notes: Optional[str] = None


class ArrivalIn(BaseModel):
    timestamp: Optional[str] = Field(None, validation_alias=AliasChoices("timestamp", "arrival_time"))
    arrival_location: Optional[str] = Field(None, validation_alias=AliasChoices("arrival_location", "location"))
    arrival_gps_location: Optional[str] = Field(
        None, validation_alias=AliasChoices("arrival_gps_location", "gps_location")
    )
    notes: Optional[str] = None


class AttendanceEventOut(BaseModel):
    message: str
    record: AttendanceRecordOut
    # True면 새 레코드가 생성된 것이므로 호출자가 전날 보고서 링크를 요청해야 한다.
    created: bool


class DayActionOut(BaseModel):
    success: bool
    message: str
    reopenedDate: Optional[date] = None
    date: Optional[_dt.date] = None
    reopened: Optional[bool] = None
    reset: Optional[bool] = None
    alreadyActive: Optional[bool] = None
    alreadyCompleted: Optional[bool] = None
    record: Optional[AttendanceRecordOut] = None


class AttendanceStatusFlags(BaseModel):
    wakeUpReported: bool
    departureReported: bool
    arrivalReported: bool
    dailyReportSubmitted: bool
    shiftScheduleSubmitted: bool
    dayCompleted: bool


class WorksiteOut(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class StaffAvailabilityOut(BaseModel):
    id: int
    date: date
    worksite_id: Optional[int] = None
    notes: Optional[str] = None
    worksite: Optional[WorksiteOut] = None

    model_config = {"from_attributes": True}


class TodayWorksiteOut(BaseModel):
    hasWorksite: bool
    worksite: Optional[WorksiteOut] = None
    availability: Optional[StaffAvailabilityOut] = None
    message: Optional[str] = None
