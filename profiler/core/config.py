from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    default_provider: str
    analytics_enabled: bool
    analytics_db_path: str
    analytics_retention_days: int
    max_document_chars: int
    evaluation_chunk_words: int
    evaluation_chunk_threshold_words: int
    evaluation_chunk_delay_s: float
    fetch_url_max_chars: int
    fetch_url_timeout_s: float
    google_api_key: str | None
    google_cse_id: str | None
    gptzero_api_key: str | None
    smtp_host: str | None
    smtp_port: int
    smtp_user: str | None
    smtp_password: str | None
    smtp_from: str | None
    smtp_use_tls: bool


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    default_provider=(_get_env("DEFAULT_PROVIDER", "openai") or "openai").strip().lower(),
    analytics_enabled=_get_env_bool("ANALYTICS_ENABLED", True),
    analytics_db_path=_get_env("ANALYTICS_DB_PATH", "data/activity.db") or "data/activity.db",
    analytics_retention_days=_get_env_int("ANALYTICS_RETENTION_DAYS", 180),
    max_document_chars=_get_env_int("MAX_DOCUMENT_CHARS", 200000),
    evaluation_chunk_words=_get_env_int("EVALUATION_CHUNK_WORDS", 700),
    evaluation_chunk_threshold_words=_get_env_int("EVALUATION_CHUNK_THRESHOLD_WORDS", 1000),
    evaluation_chunk_delay_s=_get_env_float("EVALUATION_CHUNK_DELAY_S", 10.0),
    fetch_url_max_chars=_get_env_int("FETCH_URL_MAX_CHARS", 50000),
    fetch_url_timeout_s=_get_env_float("FETCH_URL_TIMEOUT_S", 12.0),
    google_api_key=_get_env("GOOGLE_API_KEY"),
    google_cse_id=_get_env("GOOGLE_CSE_ID"),
    gptzero_api_key=_get_env("GPTZERO_API_KEY"),
    smtp_host=_get_env("SMTP_HOST"),
    smtp_port=_get_env_int("SMTP_PORT", 587),
    smtp_user=_get_env("SMTP_USER"),
    smtp_password=_get_env("SMTP_PASSWORD"),
    smtp_from=_get_env("SMTP_FROM"),
    smtp_use_tls=_get_env_bool("SMTP_USE_TLS", True),
)

if settings.default_provider not in {"openai", "anthropic", "perplexity", "deepseek"}:
    raise RuntimeError("DEFAULT_PROVIDER must be one of: openai, anthropic, perplexity, deepseek.")
