"""서비스 레이어에서 사용하는 오류 분류(HTTPException 계열) 정의입니다.

응답 본문은 `{"detail": 메시지, "code": 오류코드}` 형태로 렌더링됩니다 (app.main 참고).
"""

from typing import Optional

from fastapi import HTTPException


VALIDATION_ERROR = "VALIDATION_ERROR"
CONFLICT = "CONFLICT"
NOT_FOUND = "NOT_FOUND"
STORAGE_ERROR = "STORAGE_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"

# VALIDATION_ERROR / CONFLICT 의 세부 코드
MISSING_FIELD = "MISSING_FIELD"
INVALID_TIME_FORMAT = "INVALID_TIME_FORMAT"
ALREADY_RECORDED = "ALREADY_RECORDED"


class ServiceError(HTTPException):
    status_code = 500
    code = INTERNAL_ERROR

    def __init__(self, detail: str, code: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail)
        self.code = code or type(self).code


class ValidationFailed(ServiceError):
    status_code = 400
    code = VALIDATION_ERROR


class Conflict(ServiceError):
    status_code = 409
    code = CONFLICT


class NotFound(ServiceError):
    status_code = 404
    code = NOT_FOUND