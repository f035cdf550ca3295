"""일자 경계(JST) 계산과 ISO-8601 시각 파싱 헬퍼입니다.

"오늘"은 라우터에서 `get_current_date` 의존성으로 주입되며, 테스트에서는
`app.dependency_overrides`로 고정 일자를 넣을 수 있습니다.
"""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings
from app.utils.errors import INVALID_TIME_FORMAT, MISSING_FIELD, ValidationFailed


def current_date(tz_name: str) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def get_current_date() -> date:
    return current_date(settings.APP_TIMEZONE)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str], field: str) -> datetime:
    """Parse an ISO-8601 instant into an aware UTC datetime.

    Naive values are interpreted in APP_TIMEZONE.
    """
    if value is None or not str(value).strip():
        raise ValidationFailed(f"{field} は必須です", code=MISSING_FIELD)
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationFailed(f"{field} の形式が正しくありません", code=INVALID_TIME_FORMAT)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=ZoneInfo(settings.APP_TIMEZONE))
    return parsed.astimezone(timezone.utc)
