# app/db/session.py
import os
import logging
import threading
from contextlib import contextmanager
from typing import Optional

from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine import url as sa_url  # make_url 사용

from app.core.config import is_dev

log = logging.getLogger(__name__)

SQLITE_FALLBACK_URL = "sqlite:///./todos.db"


def _mask(url: str) -> str:
    """로그 출력용 마스킹 (비밀번호 숨김)"""
    try:
        return sa_url.make_url(url).render_as_string(hide_password=True)
    except Exception:
        return url


def _unquote(value: str) -> str:
    # .env에서 따옴표째 들어오는 경우
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"`":
        return value[1:-1].strip()
    return value


def _url_from_parts() -> Optional[str]:
    host = os.getenv("POSTGRES_HOST", "").strip()
    db = os.getenv("POSTGRES_DB", "").strip()
    user = os.getenv("POSTGRES_USER", "").strip()
    if not (host and db and user):
        return None
    return sa_url.URL.create(
        "postgresql+psycopg2",
        username=user,
        password=os.getenv("POSTGRES_PASSWORD") or None,
        host=host,
        port=int(os.getenv("POSTGRES_PORT", "5432")),
        database=db,
    ).render_as_string(hide_password=False)


def _build_db_url() -> str:
    url = _unquote(os.getenv("DATABASE_URL", ""))

    # Heroku/Render 스타일 postgres:// 는 SQLAlchemy가 모름
    if url.startswith("postgres://"):
        url = "postgresql+psycopg2://" + url[len("postgres://"):]

    if not url:
        url = _url_from_parts()
    if not url:
        if not is_dev():
            raise RuntimeError("DATABASE_URL is empty and POSTGRES_* settings are incomplete")
        # 로컬 개발용: 파일 기반 SQLite
        url = SQLITE_FALLBACK_URL

    try:
        sa_url.make_url(url)
    except Exception as e:
        raise RuntimeError(f"Invalid DATABASE_URL: {url!r} ({e})") from e

    log.info("DB URL 적용: %s", _mask(url))
    return url


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # 요청은 워커 스레드에서 처리되므로 스레드 검사 해제
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 1800,   # 30분마다 재활성화
        "pool_size": 5,
        "max_overflow": 5,      # 버스트 허용
    }


_engine: Optional[Engine] = None
_engine_lock = threading.Lock()


def get_engine() -> Engine:
    """프로세스 단위 공유 엔진. 처음 쓰일 때 한 번만 생성한다."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                url = _build_db_url()
                _engine = create_engine(url, **_engine_kwargs(url))
    return _engine


def get_session():
    """FastAPI Depends(get_session)에서 쓰는 generator."""
    with Session(get_engine()) as s:
        yield s


def create_all_tables():
    # 테이블 메타데이터 등록
    from app.models import todo  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
    log.info("테이블 생성 확인 완료")


@contextmanager
def session_scope():
    """
    요청 바깥(스크립트, 테스트 등)에서 Depends(get_session) 없이 쓰는 세션 컨텍스트.
    """
    s = Session(get_engine())
    try:
        yield s
    finally:
        s.close()
