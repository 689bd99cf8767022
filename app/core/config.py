# app/core/config.py
import os

from dotenv import load_dotenv

load_dotenv()

# ─────────────────────────────
# 실행 환경
ENV = os.getenv("ENV", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ─────────────────────────────
# CORS (콤마 구분, 비어 있으면 전체 허용)
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
] or ["*"]


def is_dev() -> bool:
    return os.getenv("ENV", ENV) == "dev"
