"""
Environment-driven settings.

Values are read once at startup (see `api/main.py`) and frozen; there is no
hot reload.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

DEFAULT_POOL_SIZE = 10
DEFAULT_COMMAND_TIMEOUT_S = 30.0
DEFAULT_PORT = 5000


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_size: int
    command_timeout: float
    host: str
    port: int
    cors_origins: list[str]
    log_level: str


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq-only options such as sslmode.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    Return the asyncpg DSN.

    `DATABASE_URL` wins when set. Otherwise the DSN is built from
    DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    host = _env_str("DB_HOST", "localhost")
    port = _env_int("DB_PORT", 5432)
    user = _env_str("DB_USER")
    password = os.environ.get("DB_PASSWORD", "")
    name = _env_str("DB_NAME")
    if not user or not name:
        raise RuntimeError("Set DATABASE_URL or DB_USER and DB_NAME.")

    credentials = quote(user, safe="")
    if password:
        credentials = f"{credentials}:{quote(password, safe='')}"
    return f"postgresql://{credentials}@{host}:{port}/{quote(name, safe='')}"


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS", "*")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["*"]


def load_settings() -> Settings:
    return Settings(
        database_url=database_url(),
        pool_size=max(1, _env_int("DB_POOL_SIZE", DEFAULT_POOL_SIZE)),
        command_timeout=_env_float("DB_COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT_S),
        host=_env_str("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_PORT),
        cors_origins=cors_origins(),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
