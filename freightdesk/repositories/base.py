"""Session handling shared by the SQL repositories."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from freightdesk.core.errors import BackendError, DuplicateRecordError, RecordNotFoundError
from freightdesk.core.log import get_logger

LOGGER = get_logger(__name__)

ModelT = TypeVar("ModelT")


class BaseRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        """Roll back on database failures and raise them as ledger errors.

        Constraint violations (unique usernames, rows still referenced by a
        shipment) surface as ``DuplicateRecordError``; anything else from the
        driver becomes a plain ``BackendError``.
        """

        try:
            yield
        except IntegrityError as exc:
            self._session.rollback()
            LOGGER.warning("Constraint violated while trying to %s", action, exc_info=exc)
            raise DuplicateRecordError(f"Could not {action}: record conflicts with existing data") from exc
        except SQLAlchemyError as exc:
            self._session.rollback()
            LOGGER.error("Database failure while trying to %s", action, exc_info=exc)
            raise BackendError(f"Could not {action}: {exc.__class__.__name__}") from exc

    def _get_or_missing(self, model: type[ModelT], key: str, label: str, **options: Any) -> ModelT:
        with self._guard(f"load the {label.lower()}"):
            instance = self._session.get(model, key, **options)
        if instance is None:
            raise RecordNotFoundError(f"{label} {key} not found")
        return instance

    @staticmethod
    def _to_decimal(value: Any) -> Decimal:
        if value is None:
            return Decimal(0)
        return value if isinstance(value, Decimal) else Decimal(str(value))

    @staticmethod
    def _coerce_date(value: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if value is None:
            raise ValueError("Cannot convert None to date")
        return date.fromisoformat(str(value)[:10])

    @staticmethod
    def _search_pattern(value: str | None) -> str | None:
        text = (value or "").strip().lower()
        return f"%{text}%" if text else None
