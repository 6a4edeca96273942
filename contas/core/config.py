"""
Configuration helpers for contas.

Exposes a Settings object that reads environment variables (backend base URL,
HTTP timeout, notice TTL, database URL, log level) so that services and
adapters do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    api_base_url: str
    http_timeout_seconds: float
    notice_ttl_seconds: float
    landing_path: str
    database_url: str
    session_ttl_seconds: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            return default
        return parsed if parsed > 0 else default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        api_base_url=os.getenv("API_BASE_URL", "http://localhost:8000").rstrip("/"),
        http_timeout_seconds=_float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"), 10.0),
        notice_ttl_seconds=_float(os.getenv("NOTICE_TTL_SECONDS", "5"), 5.0),
        landing_path=os.getenv("LANDING_PATH") or "/",
        database_url=os.getenv("DATABASE_URL", "sqlite:///./contas.db"),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "86400"), 86400),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
