# app/core/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, find_dotenv

# root .env first, then app/.env (do not override values already loaded)
load_dotenv(find_dotenv(usecwd=True))
load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=False)


def _env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------
# Storage
# ---------------------------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./route_compliance.db")
ENABLE_CREATE_ALL = _env_flag("ENABLE_CREATE_ALL")

# ---------------------------
# Auth
# ---------------------------
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 60, minimum=1)

# ---------------------------
# Compliance policy
# ---------------------------
# License expiring within this many days (inclusive) is "Expiring Soon"
EXPIRING_SOON_DAYS = _env_int("EXPIRING_SOON_DAYS", 30, minimum=0)
# Routes longer than this need a Compliant driver before approval
LONG_ROUTE_MINUTES = _env_int("LONG_ROUTE_MINUTES", 45, minimum=0)

# ---------------------------
# Runtime
# ---------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_SCHEDULER = _env_flag("ENABLE_SCHEDULER")
DIGEST_HOUR = _env_int("DIGEST_HOUR", 7, minimum=0)
DIGEST_MINUTE = _env_int("DIGEST_MINUTE", 0, minimum=0)
