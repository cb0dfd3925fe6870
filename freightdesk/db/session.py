"""Session factories for request handlers and command-line scripts."""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from .engine import create_sync_engine


def get_sessionmaker(url: str | None = None, **engine_options: Any) -> sessionmaker:
    return sessionmaker(
        bind=create_sync_engine(url, **engine_options),
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache(maxsize=1)
def get_default_sessionmaker() -> sessionmaker:
    """Factory for the configured database, built on first use and then shared."""

    return get_sessionmaker()


@contextmanager
def request_session() -> Iterator[Session]:
    """One session per request, rolled back if the handler fails.

    Repositories commit their own writes; anything left pending when an
    exception escapes is discarded.
    """

    session = get_default_sessionmaker()()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db_session() -> Iterator[Session]:
    with request_session() as session:
        yield session


@contextmanager
def session_scope(url: str | None = None, **engine_options: Any) -> Iterator[Session]:
    """Commit on success, roll back on error. Intended for scripts."""

    with get_sessionmaker(url, **engine_options)() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
