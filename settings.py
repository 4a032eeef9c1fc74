from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_HISTORY_CAPACITY_ENV = "HISTORY_CAPACITY"
_RECENT_COUNT_ENV = "DASHBOARD_RECENT_COUNT"
_HOST_ENV = "HOST"
_PORT_ENV = "PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    history_capacity: int
    dashboard_recent_count: int
    host: str
    port: int
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


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        history_capacity=_read_positive_int(_HISTORY_CAPACITY_ENV, 50),
        dashboard_recent_count=_read_positive_int(_RECENT_COUNT_ENV, 10),
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=_read_positive_int(_PORT_ENV, 3000),
        log_level=_read_log_level("INFO"),
    )
