from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_API_URL_ENV = "SPEED_HISTORY_API_URL"
_PAGE_SIZE_ENV = "SPEED_HISTORY_PAGE_SIZE"
_RADIUS_ENV = "SPEED_HISTORY_RADIUS_KM"
_TIMEOUT_ENV = "SPEED_HISTORY_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    page_size: int
    radius_km: float
    request_timeout: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    return _read_str_env(_LOG_LEVEL_ENV, default).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        api_base_url=_read_str_env(_API_URL_ENV, "http://localhost:3000").rstrip("/"),
        page_size=_read_positive_int(_PAGE_SIZE_ENV, 10),
        radius_km=_read_positive_float(_RADIUS_ENV, 10.0),
        request_timeout=_read_positive_float(_TIMEOUT_ENV, 30.0),
        log_level=_read_log_level("INFO"),
    )
