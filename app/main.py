# app/main.py
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import CORS_ORIGINS, LOG_LEVEL, is_dev
from app.db.session import create_all_tables, get_engine
from app.routers import todo

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)


app = FastAPI(title="Todo Backend", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(todo.router)


# ✅ 에러 응답은 {"error": ...} 형태로 통일
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    log.info("잘못된 요청 본문: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


@app.get("/health/db")
def health_db():
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception:
        # 내부 상세는 로그에 남기고, 외부엔 일반화된 메시지
        log.exception("DB 헬스 체크 실패")
        raise HTTPException(status_code=500, detail="Database connection failed")


if is_dev():
    create_all_tables()
