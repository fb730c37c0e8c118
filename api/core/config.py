"""
Runtime settings read from the environment.

Values are read on every call so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


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


def environment() -> str:
    return os.environ.get("ENV", "development").strip().lower() or "development"


def is_production() -> bool:
    return environment() == "production"


def database_url() -> str:
    # Tests run against their own database.
    name = "TEST_DATABASE_URL" if environment() == "test" else "DATABASE_URL"
    url = os.environ.get(name, "").strip()
    if not url:
        raise RuntimeError(f"{name} is not set.")
    return url


def api_key() -> str:
    return os.environ.get("API_KEY", "").strip()


def salt_rounds() -> int:
    # bcrypt accepts 4..31.
    return max(4, min(_env_int("SALT_ROUNDS", 10), 31))


def pool_min_size() -> int:
    return _env_int("DB_POOL_MIN", 1)


def pool_max_size() -> int:
    return max(pool_min_size(), _env_int("DB_POOL_MAX", 5))


def command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT", 30.0)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
