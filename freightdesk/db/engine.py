"""Engine construction for the operational database and the SQL ledger."""
from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from freightdesk.core.config import get_settings
from freightdesk.core.log import get_logger

LOGGER = get_logger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"}


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    # SQLite ignores REFERENCES clauses unless asked per connection.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_sync_engine(url: str | None = None, **kwargs: Any) -> Engine:
    """Build an engine for ``url`` or, by default, ``DATABASE_URL``.

    In-memory SQLite shares one connection so every session sees the same
    tables; server databases get ``pool_pre_ping`` to survive idle drops.
    """

    settings = get_settings()
    target = url or settings.database.sqlalchemy_url
    options: dict[str, Any] = {"echo": settings.sqlalchemy_echo, **kwargs}

    if target.startswith("sqlite"):
        options.setdefault("connect_args", {"check_same_thread": False})
        if _is_memory_sqlite(target):
            options.setdefault("poolclass", StaticPool)
    else:
        options.setdefault("pool_pre_ping", True)

    engine = create_engine(target, future=True, **options)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_foreign_keys(engine)

    LOGGER.debug(
        "Engine ready",
        extra={"url": settings.database.masked_url if url is None else engine.url.render_as_string(hide_password=True)},
    )
    return engine
