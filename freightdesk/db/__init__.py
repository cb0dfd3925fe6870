"""Engine and session factories."""

from .engine import create_sync_engine
from .session import (
    get_db_session,
    get_default_sessionmaker,
    get_sessionmaker,
    request_session,
    session_scope,
)

__all__ = [
    "create_sync_engine",
    "get_db_session",
    "get_default_sessionmaker",
    "get_sessionmaker",
    "request_session",
    "session_scope",
]
