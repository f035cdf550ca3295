"""FastAPI 애플리케이션 진입점. 미들웨어, 예외 핸들러, API 라우터를 등록합니다."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.config import settings
from app.database import Base, engine
import app.models  # noqa: F401 - 모델 import로 metadata 등록
from app.routers import attendance, auth, reports, staff
from app.utils.errors import INVALID_TIME_FORMAT, STORAGE_ERROR, VALIDATION_ERROR, ServiceError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="スタッフ勤怠・日報管理システム",
    description="スタッフの起床/出発/到着報告、日報、前日報告と管理者向け状況確認 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
    )


TIME_FIELDS = {"timestamp", "wake_up_time", "departure_time", "arrival_time"}


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ())]
    field = loc[-1] if loc else "request"
    code = INVALID_TIME_FORMAT if TIME_FIELDS.intersection(loc) else VALIDATION_ERROR
    return JSONResponse(
        status_code=400,
        content={"detail": f"{field}: {first.get('msg', '入力内容が正しくありません')}", "code": code},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("[storage] %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "データベース処理に失敗しました", "code": STORAGE_ERROR},
    )


# Register all routers
app.include_router(auth.router)
app.include_router(attendance.router)
app.include_router(reports.router)
app.include_router(staff.router)


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "スタッフ勤怠・日報管理システム"}
