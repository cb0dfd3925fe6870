"""Errors raised by the persistence collaborator."""
from __future__ import annotations


class BackendError(Exception):
    """A remote call (fetch or submit) failed; ``message`` comes from the collaborator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RecordNotFoundError(BackendError):
    """The requested record does not exist."""


class DuplicateRecordError(BackendError):
    """A unique field (username, shipment number, account code) is already taken."""


__all__ = ["BackendError", "DuplicateRecordError", "RecordNotFoundError"]
