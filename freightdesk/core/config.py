"""Settings read from the process environment, with a ``.env`` file as fallback.

``get_settings`` caches the result; tests that change the environment call
``get_settings.cache_clear()``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

from .log import get_logger

# Variables already set in the environment win over the file.
load_dotenv(dotenv_path=Path(__file__).resolve().parents[2] / ".env")

_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})
LEDGER_BACKENDS = ("sql", "rest")


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE_VALUES


def _env_positive_int(name: str, default: int) -> int:
    value = int(_env(name, str(default)))
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer.")
    return value


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Where the operational tables (and the SQL ledger) live.

    ``DATABASE_URL`` replaces the individual ``DB_*`` parts when set.
    """

    driver: str = "mysql+pymysql"
    host: str = "127.0.0.1"
    port: int = 3306
    user: str = "freight"
    password: str = "freight"
    name: str = "freightdesk"
    url_override: str | None = None

    def _url(self) -> URL:
        if self.url_override:
            return make_url(self.url_override)
        return URL.create(
            self.driver,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        )

    @property
    def sqlalchemy_url(self) -> str:
        if self.url_override:
            return self.url_override
        return self._url().render_as_string(hide_password=False)

    @property
    def masked_url(self) -> str:
        return self._url().render_as_string(hide_password=True)


@dataclass(frozen=True, slots=True)
class BackendSettings:
    """Which persistence collaborator serves the ledger and how to reach it."""

    kind: str = "sql"
    url: str = "http://localhost:54321"
    anon_key: str = ""
    timeout_seconds: float = 10.0

    @property
    def uses_rest(self) -> bool:
        return self.kind == "rest"


@dataclass(frozen=True, slots=True)
class AuthSettings:
    secret_key: str
    algorithm: str
    access_token_expire_minutes: int
    cookie_name: str = "access_token"
    enabled: bool = True
    use_local_auth: bool = False


@dataclass(frozen=True, slots=True)
class Settings:
    database: DatabaseSettings
    backend: BackendSettings
    auth: AuthSettings
    sqlalchemy_echo: bool = False
    currency_code: str = "LYD"
    income_statement_days: int = 30

    @classmethod
    def from_env(cls) -> "Settings":
        backend_kind = _env("LEDGER_BACKEND", "sql").strip().lower()
        if backend_kind not in LEDGER_BACKENDS:
            raise ValueError(f"LEDGER_BACKEND must be one of {', '.join(LEDGER_BACKENDS)}.")

        return cls(
            database=DatabaseSettings(
                driver=_env("DB_DRIVER", "mysql+pymysql"),
                host=_env("DB_HOST", "127.0.0.1"),
                port=int(_env("DB_PORT", "3306")),
                user=_env("DB_USER", "freight"),
                password=_env("DB_PASSWORD", "freight"),
                name=_env("DB_NAME", "freightdesk"),
                url_override=os.getenv("DATABASE_URL") or None,
            ),
            backend=BackendSettings(
                kind=backend_kind,
                url=_env("BACKEND_URL", "http://localhost:54321").rstrip("/"),
                anon_key=_env("BACKEND_ANON_KEY", ""),
                timeout_seconds=float(_env("BACKEND_TIMEOUT_SECONDS", "10")),
            ),
            auth=AuthSettings(
                secret_key=_env("JWT_SECRET_KEY", "change-me"),
                algorithm=_env("JWT_ALGORITHM", "HS256"),
                access_token_expire_minutes=_env_positive_int("JWT_EXPIRE_MINUTES", 1440),
                enabled=_env_flag("AUTH_ENABLED", True),
                use_local_auth=_env_flag("USE_LOCAL_AUTH", False),
            ),
            sqlalchemy_echo=_env_flag("SQLALCHEMY_ECHO", False),
            currency_code=_env("CURRENCY_CODE", "LYD").strip().upper(),
            income_statement_days=_env_positive_int("INCOME_STATEMENT_DAYS", 30),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings.from_env()

    get_logger(__name__).debug(
        "Settings loaded",
        extra={
            "database": settings.database.masked_url,
            "ledger_backend": settings.backend.kind,
            "ledger_url": settings.backend.url if settings.backend.uses_rest else None,
            "auth_enabled": settings.auth.enabled,
            "local_auth": settings.auth.use_local_auth,
        },
    )
    return settings


__all__ = [
    "AuthSettings",
    "BackendSettings",
    "DatabaseSettings",
    "LEDGER_BACKENDS",
    "Settings",
    "get_settings",
]
